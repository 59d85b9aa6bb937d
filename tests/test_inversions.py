"""Unit tests for the inverse Erlang C problems."""

import math

import pytest

from erlangc import inversions
from erlangc.formulas import average_wait_time, maxtime_probability, wait_probability
from erlangc.inversions import (
    max_time_maxtime,
    servers_maxtime,
    servers_waitprob,
    servers_waittime,
    service_time2_maxtime,
    service_time2_waittime,
    service_time_maxtime,
    service_time_waittime,
    traffic_maxtime,
    traffic_waitprob,
    traffic_waittime,
)

FREQUENCY = 5 / 60  # calls per second


class TestWaitProbability:
    def test_servers_known_case(self):
        assert servers_waitprob(5, 0.2) == 8
        assert wait_probability(5, 8) <= 0.2 < wait_probability(5, 7)

    def test_servers_round_trip(self):
        for servers in (6, 10, 15):
            target = wait_probability(5, servers)
            found = servers_waitprob(5, target)
            assert found <= servers
            assert wait_probability(5, found) <= target

    def test_servers_search_grows_with_traffic(self, monkeypatch):
        # The search bound scales with traffic beyond the default cap
        monkeypatch.setattr(inversions, "MAX_SERVERS", 16)
        found = inversions.servers_waitprob(40, 0.5)
        assert found is not None and found > 40
        assert wait_probability(40, found) <= 0.5 < wait_probability(40, found - 1)
        assert inversions.servers_waittime(40, 1.0, 60) > 40
        assert inversions.servers_maxtime(40, 0.8, 60, 20) > 40

    def test_servers_degenerate_and_invalid(self):
        assert servers_waitprob(0, 0.5) == 0
        assert servers_waitprob(5, 0) is None
        assert servers_waitprob(5, 1) == 0
        assert servers_waitprob(-1, 0.5) is None
        assert servers_waitprob(5, 1.5) is None

    def test_traffic_precision(self):
        traffic = traffic_waitprob(10, 0.1, 1e-6)
        assert 5 < traffic < 10
        assert abs(wait_probability(traffic, 10) - 0.1) < 1e-5

    def test_traffic_default_precision(self):
        traffic = traffic_waitprob(10, 0.1)
        assert abs(wait_probability(traffic, 10) - 0.1) < 1e-3

    def test_traffic_degenerate_and_invalid(self):
        assert traffic_waitprob(0, 0.5) == 0
        assert traffic_waitprob(10, 0) == 0
        assert traffic_waitprob(10, 1) is None
        assert traffic_waitprob(10, 0.5, 0) is None
        assert traffic_waitprob(10.5, 0.5) is None


class TestMaxtimeProbability:
    def test_servers_known_case(self):
        assert servers_maxtime(5, 0.8, 180, 20) == 8
        assert maxtime_probability(5, 8, 180, 20) >= 0.8 > maxtime_probability(5, 7, 180, 20)

    def test_servers_degenerate_and_invalid(self):
        assert servers_maxtime(0, 0.8, 180, 20) == 0
        assert servers_maxtime(5, 0.8, 0, 20) == 1
        assert servers_maxtime(5, 0, 180, 20) is None
        assert servers_maxtime(5, 0.8, 180, 0) is None
        assert servers_maxtime(5, 1, 180, 20) is None
        assert servers_maxtime(5, 0.8, -180, 20) is None

    def test_traffic_round_trip(self):
        traffic = traffic_maxtime(10, 0.8, 180, 20)
        assert 5 < traffic < 10
        assert abs(maxtime_probability(traffic, 10, 180, 20) - 0.8) < 1e-3

    def test_traffic_degenerate(self):
        assert traffic_maxtime(0, 0.8, 180, 20) == 0
        assert traffic_maxtime(10, 0, 180, 20) == 0
        assert traffic_maxtime(10, 0.8, 0, 20) is None
        assert traffic_maxtime(10, 0.8, 180, 0) is None

    def test_service_time_round_trip(self):
        mst = service_time_maxtime(5, 10, 0.99, 20)
        assert mst > 0
        assert math.isclose(maxtime_probability(5, 10, mst, 20), 0.99, rel_tol=1e-9)

    def test_service_time_unbounded_when_target_always_met(self):
        # 1 - C(5, 10) is about 0.964: any service time meets 90%
        assert service_time_maxtime(5, 10, 0.9, 20) is None

    def test_service_time_degenerate(self):
        assert service_time_maxtime(0, 10, 0.9, 20) == 0
        assert service_time_maxtime(5, 0, 0.9, 20) is None
        assert service_time_maxtime(5, 10, 0, 20) == 0
        assert service_time_maxtime(5, 10, 1, 20) is None
        assert service_time_maxtime(5, 10, 0.99, 0) == 0
        assert service_time_maxtime(10, 5, 0.99, 20) is None

    def test_service_time2_round_trip(self):
        mst = service_time2_maxtime(FREQUENCY, 10, 0.99, 20, 1e-6)
        assert mst > 0
        traffic = FREQUENCY * mst
        assert traffic < 10
        assert abs(maxtime_probability(traffic, 10, mst, 20) - 0.99) < 1e-5

    def test_service_time2_matches_fixed_traffic_variant(self):
        mst = service_time2_maxtime(FREQUENCY, 10, 0.95, 20, 1e-7)
        direct = service_time_maxtime(FREQUENCY * mst, 10, 0.95, 20)
        assert direct == pytest.approx(mst, rel=1e-4)

    def test_service_time2_degenerate(self):
        assert service_time2_maxtime(0, 10, 0.9, 20) == 0
        assert service_time2_maxtime(FREQUENCY, 0, 0.9, 20) is None
        assert service_time2_maxtime(FREQUENCY, 10, 0, 20) == 0
        assert service_time2_maxtime(FREQUENCY, 10, 1, 20) is None
        assert service_time2_maxtime(FREQUENCY, 10, 0.9, 0) == 0
        assert service_time2_maxtime(FREQUENCY, 10, 0.9, 20, -1) is None

    def test_max_time_round_trip(self):
        maxtime = max_time_maxtime(5, 10, 0.99, 60)
        assert maxtime > 0
        assert math.isclose(maxtime_probability(5, 10, 60, maxtime), 0.99, rel_tol=1e-9)

    def test_max_time_undefined_when_target_met_without_waiting(self):
        # 1 - C(5, 10) is about 0.964: every positive deadline meets 90%
        assert max_time_maxtime(5, 10, 0.9, 60) is None
        assert maxtime_probability(5, 10, 60, 1e-9) >= 0.9
        assert maxtime_probability(5, 10, 60, 0) < 0.9

    def test_max_time_results_round_trip(self):
        for target in (0.97, 0.99, 0.999):
            maxtime = max_time_maxtime(5, 10, target, 60)
            assert maxtime > 0
            assert maxtime_probability(5, 10, 60, maxtime) == pytest.approx(target, rel=1e-9)

    def test_max_time_degenerate(self):
        assert max_time_maxtime(0, 10, 0.9, 60) == 0
        assert max_time_maxtime(5, 0, 0.9, 60) is None
        assert max_time_maxtime(5, 10, 0.9, 0) == 0
        assert max_time_maxtime(5, 10, 0, 60) == 0
        assert max_time_maxtime(5, 10, 1, 60) is None
        assert max_time_maxtime(12, 10, 0.99, 60) is None


class TestAverageWaitTime:
    def test_servers_known_case(self):
        assert servers_waittime(5, 1.0, 60) == 10
        assert average_wait_time(5, 10, 60) <= 1.0 < average_wait_time(5, 9, 60)

    def test_servers_degenerate_and_invalid(self):
        assert servers_waittime(0, 1.0, 60) == 0
        assert servers_waittime(5, 1.0, 0) == 1
        assert servers_waittime(5, 0, 60) is None
        assert servers_waittime(-5, 1.0, 60) is None

    def test_traffic_round_trip(self):
        target = average_wait_time(5, 10, 60)
        traffic = traffic_waittime(10, target, 60, precision=1e-6)
        assert traffic == pytest.approx(5, abs=1e-4)

    def test_traffic_degenerate(self):
        assert traffic_waittime(0, 1.0, 60) == 0
        assert traffic_waittime(10, 0, 60) is None
        assert traffic_waittime(10, 1.0, 0) is None

    def test_service_time_round_trip(self):
        awt = average_wait_time(5, 10, 60)
        assert service_time_waittime(5, 10, awt) == pytest.approx(60, rel=1e-9)

    def test_service_time_degenerate(self):
        assert service_time_waittime(0, 10, 1.0) == 0
        assert service_time_waittime(5, 0, 1.0) is None
        assert service_time_waittime(5, 10, 0) == 0
        assert service_time_waittime(10, 10, 1.0) is None

    def test_service_time2_round_trip(self):
        mst = service_time2_waittime(FREQUENCY, 10, 2.0, precision=1e-6)
        traffic = FREQUENCY * mst
        assert 0 < traffic < 10
        assert average_wait_time(traffic, 10, mst) == pytest.approx(2.0, abs=1e-4)

    def test_service_time2_degenerate(self):
        assert service_time2_waittime(0, 10, 2.0) is None
        assert service_time2_waittime(FREQUENCY, 0, 2.0) is None
        assert service_time2_waittime(FREQUENCY, 10, 0) == 0
        assert service_time2_waittime(FREQUENCY, 10, -2.0) is None
