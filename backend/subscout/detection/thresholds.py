"""
Tunable threshold table for recurring-charge classification.

The numbers here were tuned against real statements and are expected to move.
Nothing downstream should treat them as contractual.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from subscout.config import Settings, DEFAULT_MERCHANT_STOPLIST
from subscout.detection.records import Frequency


class FrequencyBand(BaseModel):
    """Accepted average-interval range for one cadence."""
    model_config = ConfigDict(frozen=True)

    frequency: Frequency
    min_days: float
    max_days: float
    expected_days: int
    max_gap_deviation: float  # Largest single-gap drift from expected_days

    def contains(self, avg_interval: float) -> bool:
        return self.min_days <= avg_interval <= self.max_days


DEFAULT_BANDS = (
    FrequencyBand(frequency=Frequency.weekly, min_days=4, max_days=10, expected_days=7, max_gap_deviation=3),
    FrequencyBand(frequency=Frequency.biweekly, min_days=10, max_days=18, expected_days=14, max_gap_deviation=5),
    FrequencyBand(frequency=Frequency.monthly, min_days=20, max_days=40, expected_days=30, max_gap_deviation=10),
    FrequencyBand(frequency=Frequency.quarterly, min_days=75, max_days=105, expected_days=90, max_gap_deviation=20),
    FrequencyBand(frequency=Frequency.yearly, min_days=340, max_days=390, expected_days=365, max_gap_deviation=30),
)


class DetectionThresholds(BaseModel):
    """Everything the grouper and classifier need to decide, in one place."""
    model_config = ConfigDict(frozen=True)

    bands: Tuple[FrequencyBand, ...] = DEFAULT_BANDS
    min_transactions: int = 2
    min_key_length: int = 2
    confidence_floor: float = 0.4
    confidence_ceiling: float = 1.0
    high_amount_variance: float = 0.25
    amount_variance_penalty: float = 0.2
    stoplist: Tuple[str, ...] = tuple(DEFAULT_MERCHANT_STOPLIST)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DetectionThresholds":
        return cls(
            min_transactions=settings.detection_min_transactions,
            confidence_floor=settings.detection_confidence_floor,
            high_amount_variance=settings.detection_high_amount_variance,
            amount_variance_penalty=settings.detection_amount_variance_penalty,
            stoplist=tuple(settings.merchant_stoplist),
        )

    def band_for(self, avg_interval: float) -> Optional[FrequencyBand]:
        """First band whose range holds the average interval."""
        for band in self.bands:
            if band.contains(avg_interval):
                return band
        return None


DEFAULT_THRESHOLDS = DetectionThresholds()
