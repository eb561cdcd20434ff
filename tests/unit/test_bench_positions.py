"""
Unit tests for the position benchmark script.
"""

import logging

from scripts.bench_positions import main, run_multiple, run_single


class TestScenarios:

    def test_single_scenario(self):
        positions, errors = run_single(3)

        assert errors == []
        assert positions == sorted(positions)
        assert len(positions) == 3

    def test_multiple_scenario(self):
        positions, errors, instances = run_multiple(clients=4, rounds=3)

        assert errors == []
        assert len(instances) == 4
        assert len(positions) == 2 + 4 * 3 * 2
        assert len(set(positions)) == len(positions)


class TestMain:

    def test_single_run_succeeds(self, caplog):
        with caplog.at_level(logging.INFO):
            assert main(['--scenario', 'single', '--iterations', '5']) == 0
        assert "Benchmark completed successfully" in caplog.text

    def test_multiple_run_succeeds(self):
        assert main(['--clients', '3', '--rounds', '2', '--verbose']) == 0

    def test_rejects_non_positive_counts(self):
        assert main(['--clients', '0']) == 2
