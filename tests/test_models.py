"""
Tests for the four base forecasting models.
"""
import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from co2ensemble.models import (
    ModelRegistry, LinearRegressionModel, PolynomialRegressionModel,
    ExponentialSmoothingModel, MovingAverageTrendModel, fit_line,
    INDEXED_BY_YEAR, INDEXED_BY_STEPS
)
from co2ensemble.core import DegenerateTrainingWindow


class TestLinearRegression:
    """Tests for the OLS trend line."""

    @pytest.fixture
    def linear_data(self):
        """y = 3x + 7 over twenty calendar years."""
        years = np.arange(2000, 2020, dtype=float)
        return years, 3 * years + 7

    def test_perfect_fit(self, linear_data):
        """Test exact recovery of slope and intercept."""
        years, values = linear_data
        model = LinearRegressionModel().fit(years, values)

        assert model.slope == pytest.approx(3.0, rel=1e-9)
        assert model.intercept == pytest.approx(7.0, abs=1e-4)
        assert model.r2 == pytest.approx(1.0, abs=1e-9)

    def test_predictions_match_line(self, linear_data):
        """Test in-window and near-window predictions."""
        years, values = linear_data
        model = LinearRegressionModel().fit(years, values)

        for year in [2000, 2010, 2019, 2020, 2025]:
            assert model.predict(year) == pytest.approx(3 * year + 7, rel=1e-9)

    def test_identical_x_gives_flat_fit(self):
        """Test the zero-denominator case."""
        slope, intercept = fit_line(np.array([2020.0, 2020.0, 2020.0]), np.array([1.0, 2.0, 3.0]))

        assert slope == 0.0
        assert intercept == pytest.approx(2.0)

    def test_constant_values_r2_zero(self):
        """Test that R2 is 0 rather than NaN for constant y."""
        years = np.arange(2000, 2010, dtype=float)
        model = LinearRegressionModel().fit(years, np.full(10, 5.0))

        assert model.r2 == 0.0
        assert model.predict(2030) == pytest.approx(5.0)

    def test_single_point(self):
        """Test that one observation gives a flat line through it."""
        model = LinearRegressionModel().fit(np.array([2024.0]), np.array([36.8]))

        assert model.slope == 0.0
        assert model.predict(2030) == pytest.approx(36.8)

    def test_array_prediction(self, linear_data):
        """Test vectorized prediction."""
        years, values = linear_data
        model = LinearRegressionModel().fit(years, values)
        result = model.predict(years)

        assert isinstance(result, np.ndarray)
        np.testing.assert_allclose(result, values, rtol=1e-9)

    def test_scalar_prediction_is_float(self, linear_data):
        """Test that scalar input returns a plain float."""
        years, values = linear_data
        model = LinearRegressionModel().fit(years, values)

        assert isinstance(model.predict(2030), float)


class TestPolynomialRegression:
    """Tests for normal-equation polynomial regression."""

    @pytest.fixture
    def quadratic_data(self):
        """y = 0.5 t^2 + 2 t + 100 with t = year - 2000."""
        years = np.arange(2000, 2015, dtype=float)
        t = years - 2000
        return years, 0.5 * t ** 2 + 2 * t + 100

    def test_quadratic_fit(self, quadratic_data):
        """Test exact fit of a quadratic."""
        years, values = quadratic_data
        model = PolynomialRegressionModel().fit(years, values)

        assert model.r2 == pytest.approx(1.0, abs=1e-9)
        np.testing.assert_allclose(model.predict(years), values, rtol=1e-8)

    def test_quadratic_extrapolation(self, quadratic_data):
        """Test prediction outside the training window."""
        years, values = quadratic_data
        model = PolynomialRegressionModel().fit(years, values)

        assert model.predict(2020) == pytest.approx(340.0, rel=1e-8)

    def test_cubic(self):
        """Test a degree-3 fit."""
        years = np.arange(1990, 2010, dtype=float)
        t = years - 1990
        values = 0.01 * t ** 3 - 0.2 * t ** 2 + t + 50
        model = PolynomialRegressionModel({'degree': 3}).fit(years, values)

        np.testing.assert_allclose(model.predict(years), values, rtol=1e-8)

    def test_linear_data_with_degree_two(self):
        """Test that a straight line is recovered by a quadratic fit."""
        years = np.arange(2015, 2025, dtype=float)
        values = 10 + 2 * (years - 2015)
        model = PolynomialRegressionModel().fit(years, values)

        assert model.predict(2025) == pytest.approx(30.0, rel=1e-8)
        assert abs(model.coefficients[2]) < 1e-8

    def test_single_point_is_degenerate(self):
        """Test that one point cannot support a 3-parameter fit."""
        with pytest.raises(DegenerateTrainingWindow) as exc_info:
            PolynomialRegressionModel().fit(np.array([2024.0]), np.array([37.0]))

        assert exc_info.value.degree == 2
        assert exc_info.value.n_distinct == 1

    def test_two_points_degree_two(self):
        """Test that two distinct years are not enough for degree 2."""
        with pytest.raises(DegenerateTrainingWindow):
            PolynomialRegressionModel().fit(np.array([2023.0, 2024.0]), np.array([36.0, 37.0]))

    def test_repeated_years(self):
        """Test that repeated x values count once."""
        with pytest.raises(DegenerateTrainingWindow):
            PolynomialRegressionModel().fit(
                np.array([2020.0, 2020.0, 2021.0, 2021.0]),
                np.array([1.0, 2.0, 3.0, 4.0])
            )

    def test_two_points_degree_one(self):
        """Test that degree 1 only needs two distinct years."""
        model = PolynomialRegressionModel({'degree': 1}).fit(
            np.array([2023.0, 2024.0]), np.array([36.0, 37.0])
        )

        assert model.predict(2025) == pytest.approx(38.0)

    def test_fitted_params(self, quadratic_data):
        """Test reported parameters."""
        years, values = quadratic_data
        params = PolynomialRegressionModel().fit(years, values).get_fitted_params()

        assert params['degree'] == 2
        assert len(params['coefficients']) == 3
        assert params['x_offset'] == pytest.approx(2007.0)


class TestExponentialSmoothing:
    """Tests for exponential smoothing with trend."""

    def test_hand_computed(self):
        """Test smoothing and trend on a short series."""
        model = ExponentialSmoothingModel({'alpha': 0.5}).fit(
            np.array([2000.0, 2001.0, 2002.0]), np.array([1.0, 2.0, 3.0])
        )

        np.testing.assert_allclose(model.smoothed, [1.0, 1.5, 2.25])
        assert model.trend == pytest.approx(0.3125)
        assert model.predict(2) == pytest.approx(2.875)

    def test_short_window_uses_full_divisor(self):
        """Test that a window shorter than trend_window keeps the fixed divisor."""
        model = ExponentialSmoothingModel().fit(
            np.array([2000.0, 2001.0, 2002.0]), np.array([10.0, 20.0, 30.0])
        )

        # smoothed: 10, 13, 18.1
        assert model.trend == pytest.approx(8.1 / 4)
        assert model.predict(1) == pytest.approx(18.1 + 2.025)

    def test_recent_window_trend(self):
        """Test that only the last five smoothed values set the trend."""
        years = np.arange(2015, 2025, dtype=float)
        values = 10 + 2 * (years - 2015)
        model = ExponentialSmoothingModel().fit(years, values)

        assert model.level == pytest.approx(23.521650166, rel=1e-9)
        assert model.trend == pytest.approx(1.8509975415, rel=1e-9)
        assert model.predict(1) == pytest.approx(25.3726477075, rel=1e-9)

    def test_single_value(self):
        """Test that a single observation gives a flat forecast."""
        model = ExponentialSmoothingModel().fit(np.array([2024.0]), np.array([37.0]))

        assert model.trend == 0.0
        assert model.predict(5) == pytest.approx(37.0)

    def test_steps_ahead_zero_is_level(self):
        """Test that zero steps ahead returns the last smoothed value."""
        model = ExponentialSmoothingModel().fit(np.arange(5.0), np.array([5.0, 6.0, 8.0, 7.0, 9.0]))

        assert model.predict(0) == pytest.approx(model.level)

    def test_indexed_by_steps(self):
        """Test the model's input convention."""
        assert ExponentialSmoothingModel.indexed_by == INDEXED_BY_STEPS


class TestMovingAverageTrend:
    """Tests for the moving average trend model."""

    def test_full_window(self):
        """Test average, slope and the half-window offset."""
        model = MovingAverageTrendModel().fit(np.arange(2015, 2025, dtype=float), np.arange(1.0, 11.0))

        assert model.average == pytest.approx(5.5)
        assert model.trend_slope == pytest.approx(1.0)
        assert model.predict(1) == pytest.approx(11.5)
        assert model.predict(0) == pytest.approx(10.5)

    def test_uses_last_window_only(self):
        """Test that values before the window are ignored."""
        values = np.concatenate([np.full(5, 100.0), np.arange(1.0, 11.0)])
        model = MovingAverageTrendModel().fit(np.arange(2010, 2025, dtype=float), values)

        assert model.average == pytest.approx(5.5)
        assert model.trend_slope == pytest.approx(1.0)

    def test_short_series_is_flat(self):
        """Test the degraded last-value forecast."""
        model = MovingAverageTrendModel().fit(np.array([2022.0, 2023.0, 2024.0]), np.array([3.0, 4.0, 5.0]))

        assert model.degraded
        assert model.predict(4) == pytest.approx(5.0)

    def test_custom_window(self):
        """Test a smaller configured window."""
        model = MovingAverageTrendModel({'window': 4}).fit(
            np.arange(2018, 2025, dtype=float), np.array([9.0, 9.0, 9.0, 2.0, 4.0, 6.0, 8.0])
        )

        assert model.average == pytest.approx(5.0)
        assert model.trend_slope == pytest.approx(2.0)
        assert model.predict(1) == pytest.approx(11.0)


class TestModelRegistry:
    """Tests for the model registry."""

    def test_registered_models(self):
        """Test that all four base models are registered."""
        names = ModelRegistry.list_models()

        for name in ['linear', 'polynomial', 'exponential', 'moving_average']:
            assert name in names

    def test_create_with_params(self):
        """Test creating a model with parameters."""
        model = ModelRegistry.create('polynomial', {'degree': 3})

        assert isinstance(model, PolynomialRegressionModel)
        assert model.degree == 3

    def test_unknown_model(self):
        """Test that an unknown name is rejected."""
        with pytest.raises(ValueError):
            ModelRegistry.get('arima')

    def test_predict_before_fit(self):
        """Test that an unfitted model refuses to predict."""
        with pytest.raises(ValueError):
            LinearRegressionModel().predict(2030)

    def test_input_conventions(self):
        """Test which models take years and which take steps."""
        assert LinearRegressionModel.indexed_by == INDEXED_BY_YEAR
        assert PolynomialRegressionModel.indexed_by == INDEXED_BY_YEAR
        assert MovingAverageTrendModel.indexed_by == INDEXED_BY_STEPS

    def test_mismatched_lengths(self):
        """Test that training arrays must align."""
        with pytest.raises(ValueError):
            LinearRegressionModel().fit(np.arange(3.0), np.arange(4.0))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
