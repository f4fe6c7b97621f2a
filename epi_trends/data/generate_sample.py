"""Generate sample weekly case counts for exercising the analysis engine.

Run: python -m epi_trends.data.generate_sample
"""

import numpy as np
import pandas as pd


def generate_sample_cases(
    start_year: int = 2021,
    n_weeks: int = 104,  # 2 years
    base_cases: float = 500,
    trend_slope: float = 1.5,
    seasonal_amplitude: float = 150,
    noise_std: float = 20,
    n_spikes: int = 2,
    seed: int = 42,
) -> pd.DataFrame:
    """Weekly case counts with a linear trend, an annual wave, noise and a few spikes.

    Weeks are labelled "<year>-W<week>" on a 52-week calendar.
    """
    rng = np.random.default_rng(seed)
    t = np.arange(n_weeks)

    trend = base_cases + trend_slope * t
    # Winter peak around week 1, trough mid-year
    seasonal = seasonal_amplitude * np.cos(2 * np.pi * t / 52)
    noise = rng.normal(0, noise_std, n_weeks)

    cases = np.maximum(trend + seasonal + noise, 0)

    if n_spikes > 0:
        spike_idx = rng.choice(n_weeks, size=min(n_spikes, n_weeks), replace=False)
        cases[spike_idx] *= rng.uniform(2.5, 3.5, size=len(spike_idx))

    labels = [f"{start_year + i // 52}-W{i % 52 + 1:02d}" for i in range(n_weeks)]

    return pd.DataFrame({
        "period_label": labels,
        "count": np.round(cases, 0).astype(int),
        "region": rng.choice(["North", "South", "East", "West", "Central"], n_weeks),
    })


if __name__ == "__main__":
    df = generate_sample_cases()
    print(f"Sample data generated: {df.shape[0]} weeks")
    print(f"  Period range: {df['period_label'].iloc[0]} to {df['period_label'].iloc[-1]}")
    print(f"  Mean cases: {df['count'].mean():.0f}")
    print(df.head())
