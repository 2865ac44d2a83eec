"""Tests for timing.rate module (sampling rate estimation)."""

import numpy as np
import pytest

from timing import estimate_fs, expected_spacing_error
from timing.errors import TimestampValidationError
from tests.fixtures import generate_jittered_timestamps, insert_gap


class TestEstimateFsConstantSpacing:
    """Tests on perfectly regular timestamps."""

    @pytest.mark.parametrize("spacing_ms", [0.5, 1.0, 2.0, 4.0, 8.333, 16.0, 33.0])
    def test_fs_matches_spacing(self, spacing_ms: float):
        """fs should be 1000 / spacing rounded to 2 decimals."""
        t_ms = 100.0 + spacing_ms * np.arange(20)

        est = estimate_fs(t_ms, include_diagnostics=True)

        assert est.fs == round(1000.0 / spacing_ms, 2)
        assert est.dt_ms == pytest.approx(spacing_ms)
        assert est.percent_off_by_more_than_half_dt == 0.0
        assert not est.off_by_more_than_half_dt.any()

    def test_sixty_hz(self):
        """A 60 Hz grid gives fs 60.0 despite the non-terminating period."""
        t_ms = np.arange(50) * (1000.0 / 60.0)

        est = estimate_fs(t_ms)

        assert est.fs == 60.0

    def test_accepts_list_input(self):
        """Plain lists should be accepted."""
        est = estimate_fs([0, 10, 20, 30])
        assert est.fs == 100.0
        assert est.dt_ms == 10.0

    def test_accepts_column_vector(self):
        """A single-column 2-D array should be accepted."""
        t_ms = np.arange(5, dtype=np.float64).reshape(-1, 1)
        est = estimate_fs(t_ms)
        assert est.fs == 1000.0


class TestEstimateFsRobustness:
    """Tests for robustness to gaps and jitter."""

    def test_median_ignores_rare_gap(self):
        """A single large gap should not move the estimate."""
        est = estimate_fs([0, 1, 2, 10, 11, 12])
        assert est.dt_ms == 1.0
        assert est.fs == 1000.0

    def test_jittered_recording(self):
        """Jitter well below the period keeps the estimate near nominal."""
        t_ms = generate_jittered_timestamps(num_samples=2000, fs=120.0, jitter_ms=0.5, seed=3)

        est = estimate_fs(t_ms, include_diagnostics=True)

        assert est.fs == pytest.approx(120.0, rel=0.01)
        assert est.percent_off_by_more_than_half_dt == 0.0

    def test_gap_is_flagged_in_diagnostics(self):
        """Samples after a gap should be counted as off by more than half dt."""
        t_ms = insert_gap(generate_jittered_timestamps(num_samples=100, fs=100.0), 49, 50.0)

        est = estimate_fs(t_ms, include_diagnostics=True)

        assert est.off_by_more_than_half_dt[50]
        assert est.off_by_more_than_half_dt.sum() == 1
        assert est.percent_off_by_more_than_half_dt == pytest.approx(1.0)


class TestDiagnostics:
    """Tests for the per-sample timing diagnostics."""

    def test_error_vector(self):
        """Deviation is measured against the previous actual sample."""
        est = estimate_fs([0, 1, 2, 10, 11, 12], include_diagnostics=True)

        np.testing.assert_allclose(est.dt_error_ms, [0, 0, 0, 7, 0, 0])
        assert est.off_by_more_than_half_dt.tolist() == [False, False, False, True, False, False]

    def test_percentage_over_all_samples(self):
        """The percentage divides by the number of samples, not differences."""
        est = estimate_fs([0, 1, 2, 10, 11, 12], include_diagnostics=True)
        assert est.percent_off_by_more_than_half_dt == pytest.approx(100.0 / 6)

    def test_first_sample_has_zero_error(self):
        """The first sample anchors the ideal series."""
        err = expected_spacing_error(np.array([5.0, 7.0, 9.5]), 2.0)
        assert err.tolist() == [0.0, 0.0, 0.5]

    def test_diagnostics_omitted_by_default(self):
        """Without include_diagnostics only fs and dt_ms are set."""
        est = estimate_fs([0, 1, 2])
        assert est.dt_error_ms is None
        assert est.off_by_more_than_half_dt is None
        assert est.percent_off_by_more_than_half_dt is None

    def test_to_dict(self):
        """to_dict includes arrays only on request."""
        est = estimate_fs([0, 1, 2, 10], include_diagnostics=True)

        d = est.to_dict()
        assert d["fs"] == 1000.0
        assert "dt_error_ms" not in d

        d = est.to_dict(include_arrays=True)
        assert d["dt_error_ms"] == [0.0, 0.0, 0.0, 7.0]


class TestEstimateFsValidation:
    """Tests for input validation."""

    def test_repeated_timestamp_raises(self):
        """Repeated timestamps should raise NOT_STRICTLY_INCREASING."""
        with pytest.raises(TimestampValidationError) as exc_info:
            estimate_fs([0, 1, 1, 2])

        assert exc_info.value.code == "NOT_STRICTLY_INCREASING"
        assert exc_info.value.details["index"] == 2

    def test_decreasing_raises(self):
        """Decreasing timestamps should raise NOT_STRICTLY_INCREASING."""
        with pytest.raises(TimestampValidationError) as exc_info:
            estimate_fs([0, 2, 1])

        assert exc_info.value.code == "NOT_STRICTLY_INCREASING"

    def test_nan_raises(self):
        """NaN entries should fail the monotonicity check."""
        with pytest.raises(TimestampValidationError) as exc_info:
            estimate_fs([0, float("nan"), 2])

        assert exc_info.value.code == "NOT_STRICTLY_INCREASING"

    def test_multi_column_raises(self):
        """A 2-column array should raise INVALID_SHAPE."""
        with pytest.raises(TimestampValidationError) as exc_info:
            estimate_fs(np.zeros((4, 2)))

        assert exc_info.value.code == "INVALID_SHAPE"

    @pytest.mark.parametrize("t_ms", [[], [5.0]])
    def test_too_short_raises(self, t_ms):
        """Fewer than two samples should raise TOO_SHORT."""
        with pytest.raises(TimestampValidationError) as exc_info:
            estimate_fs(t_ms)

        assert exc_info.value.code == "TOO_SHORT"

    def test_error_str_includes_code(self):
        """Error string should be prefixed with the code."""
        with pytest.raises(TimestampValidationError) as exc_info:
            estimate_fs([1, 0])

        assert str(exc_info.value).startswith("[NOT_STRICTLY_INCREASING]")
