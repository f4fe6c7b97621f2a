"""Abstract base class for forecasting models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import pandas as pd


class BaseForecaster(ABC):
    """Contract that every forecasting model must implement."""

    name: str = "BaseForecaster"

    @abstractmethod
    def fit(self, y_train: pd.Series, week_numbers: Sequence[int] | None = None) -> None:
        """Fit the model on an ordered series.

        Args:
            y_train: Observed values, oldest first.
            week_numbers: Position of each observation in the seasonal cycle
                (1..seasonal_period). Defaults to the series position.
        """

    @abstractmethod
    def fitted(self) -> pd.DataFrame:
        """In-sample values, one row per training observation."""

    @abstractmethod
    def predict(self, horizon: int) -> pd.DataFrame:
        """Generate forecasts for the given horizon.

        Returns:
            DataFrame with one row per future period and at least a
            ``forecast`` column.
        """

    @abstractmethod
    def get_params(self) -> dict:
        """Return model parameters as a dictionary."""

    def summary(self) -> str:
        """Return a human-readable summary of the fitted model."""
        return f"{self.name}: {self.get_params()}"
