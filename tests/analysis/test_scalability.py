"""Tests for crossover analysis and chart data."""

from crossbench.analysis.scalability import ScalabilityChartData, crossover


class TestCrossover:
    """Tests for the crossover function."""

    def test_accelerator_wins_at_larger_size(self, make_result):
        history = [make_result(64, 10.0, 50.0), make_result(512, 200.0, 80.0)]
        assert crossover(history) == 512

    def test_general_always_faster(self, make_result):
        history = [make_result(64, 1.0, 5.0), make_result(128, 4.0, 9.0)]
        assert crossover(history) is None

    def test_empty_history(self):
        assert crossover([]) is None

    def test_unsorted_history(self, make_result):
        """Results are ordered by size before searching."""
        history = [
            make_result(1024, 900.0, 100.0),
            make_result(64, 10.0, 50.0),
            make_result(256, 60.0, 40.0),
        ]
        assert crossover(history) == 256

    def test_does_not_mutate_history(self, make_result):
        history = [make_result(512, 200.0, 80.0), make_result(64, 10.0, 50.0)]
        original = list(history)

        crossover(history)

        assert history == original

    def test_equal_times_are_not_a_win(self, make_result):
        history = [make_result(128, 20.0, 20.0), make_result(256, 60.0, 59.0)]
        assert crossover(history) == 256

    def test_uses_total_not_compute_time(self, make_result):
        """A fast kernel does not count when transfers make the total slower."""
        history = [make_result(128, 20.0, 30.0, compute=5.0)]
        assert crossover(history) is None

    def test_first_win_reported_even_if_later_lost(self, make_result):
        history = [
            make_result(64, 10.0, 5.0),
            make_result(128, 20.0, 40.0),
        ]
        assert crossover(history) == 64


class TestScalabilityChartData:
    """Tests for ScalabilityChartData."""

    def test_from_history(self, make_result):
        history = [make_result(512, 200.0, 80.0, compute=30.0), make_result(64, 10.0, 50.0, compute=2.0)]

        data = ScalabilityChartData.from_history(history)

        assert data.general_points == ((64, 10.0), (512, 200.0))
        assert data.accelerated_points == ((64, 50.0), (512, 80.0))
        assert data.compute_points == ((64, 2.0), (512, 30.0))
        assert data.crossover_size == 512
        assert not data.is_empty

    def test_empty(self):
        data = ScalabilityChartData.from_history([])

        assert data.is_empty
        assert data.crossover_size is None
