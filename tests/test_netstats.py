import pytest

from ecoframe.netstats import (
    RATE_SAMPLES,
    BandwidthSampler,
    ClientStats,
    PeerCounters,
)


def test_disconnected_gives_zero_stats():
    sampler = BandwidthSampler()
    assert sampler.fetch(None, 5.0) == ClientStats()


def test_totals_and_ping_are_copied():
    counters = PeerCounters(
        incoming_total=11,
        total_received=22,
        outgoing_total=33,
        total_sent=44,
        packets_sent=55,
        packets_lost=0,
        round_trip_time=66,
        lowest_round_trip_time=7,
    )
    stats = BandwidthSampler().fetch(counters, 2.0)
    assert stats.incoming_total == 11
    assert stats.total_received == 22
    assert stats.outgoing_total == 33
    assert stats.total_sent == 44
    assert stats.packets_sent == 55
    assert stats.ping == 66
    assert stats.low_ping == 7


def test_packet_loss_ratio():
    counters = PeerCounters(packets_sent=40, packets_lost=10)
    stats = BandwidthSampler().fetch(counters, 1.0)
    assert stats.packet_loss == pytest.approx(10 / 40)


def test_no_packets_sent_means_no_loss():
    stats = BandwidthSampler().fetch(PeerCounters(packets_lost=3), 1.0)
    assert stats.packet_loss == 0.0


def test_no_measurement_at_time_zero():
    stats = BandwidthSampler().fetch(PeerCounters(total_sent=800, total_received=400), 0.0)
    assert stats.outgoing_bandwidth == 0.0
    assert stats.incoming_bandwidth == 0.0


def test_first_measurement_averages_over_all_samples():
    stats = BandwidthSampler().fetch(PeerCounters(total_sent=800, total_received=1600), 1.0)
    assert stats.outgoing_bandwidth == pytest.approx(800 / RATE_SAMPLES)
    assert stats.incoming_bandwidth == pytest.approx(1600 / RATE_SAMPLES)


def test_bandwidth_held_until_next_measure():
    sampler = BandwidthSampler()
    first = sampler.fetch(PeerCounters(total_sent=800), 1.0)
    later = sampler.fetch(PeerCounters(total_sent=5000), 1.5)
    assert later.outgoing_bandwidth == first.outgoing_bandwidth
    assert later.total_sent == 5000


def test_steady_rate_converges_to_delta():
    sampler = BandwidthSampler()
    delta = 250
    stats = None
    for step in range(1, RATE_SAMPLES + 3):
        counters = PeerCounters(total_sent=delta * step, total_received=2 * delta * step)
        stats = sampler.fetch(counters, float(step) * 1.5)
    assert stats.outgoing_bandwidth == pytest.approx(delta)
    assert stats.incoming_bandwidth == pytest.approx(2 * delta)


def test_bandwidth_never_negative_and_bounded():
    sampler = BandwidthSampler()
    totals = [100, 300, 300, 900, 1000]
    for step, total in enumerate(totals, start=1):
        stats = sampler.fetch(PeerCounters(total_sent=total), step * 2.0)
        assert 0.0 <= stats.outgoing_bandwidth <= total


def test_independent_samplers_do_not_share_state():
    a = BandwidthSampler()
    b = BandwidthSampler()
    a.fetch(PeerCounters(total_sent=800), 1.0)
    stats = b.fetch(PeerCounters(), 1.0)
    assert stats.outgoing_bandwidth == 0.0