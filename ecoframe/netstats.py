"""Connection statistics of a network client: totals, bandwidth, loss and ping."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Optional

RATE_SAMPLES = 8
MEASURE_INTERVAL = 1.0
_UINT64_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class PeerCounters:
    """Raw counters reported by a connected peer."""

    incoming_total: int = 0
    total_received: int = 0
    outgoing_total: int = 0
    total_sent: int = 0
    packets_sent: int = 0
    packets_lost: int = 0
    round_trip_time: int = 0
    lowest_round_trip_time: int = 0


@dataclass(frozen=True)
class ClientStats:
    """Statistics of the client connection; all zero while disconnected."""

    incoming_total: int = 0
    total_received: int = 0
    outgoing_total: int = 0
    total_sent: int = 0
    incoming_bandwidth: float = 0.0
    outgoing_bandwidth: float = 0.0
    packets_sent: int = 0
    packets_lost: int = 0
    packet_loss: float = 0.0
    ping: int = 0
    low_ping: int = 0


class BandwidthSampler:
    """Turns peer counters into stats, measuring bandwidth about once a second.

    Bandwidth is the mean of the last eight per-measurement byte deltas;
    between measurements the previous figures are reported again.
    """

    def __init__(self) -> None:
        self._next_measure = 0.0
        self._incoming = 0.0
        self._outgoing = 0.0
        self._last_sent = 0
        self._last_received = 0
        self._sent: deque[int] = deque([0] * RATE_SAMPLES, maxlen=RATE_SAMPLES)
        self._received: deque[int] = deque([0] * RATE_SAMPLES, maxlen=RATE_SAMPLES)

    def fetch(self, counters: Optional[PeerCounters], now: float) -> ClientStats:
        """Stats for ``counters`` at time ``now``; ``None`` means not connected."""
        if counters is None:
            return ClientStats()

        if self._next_measure < now:
            sent_delta = (counters.total_sent - self._last_sent) & _UINT64_MASK
            recv_delta = (counters.total_received - self._last_received) & _UINT64_MASK
            self._last_sent = counters.total_sent
            self._last_received = counters.total_received
            self._sent.append(sent_delta)
            self._received.append(recv_delta)
            self._incoming = sum(self._received) / RATE_SAMPLES
            self._outgoing = sum(self._sent) / RATE_SAMPLES
            self._next_measure = now + MEASURE_INTERVAL

        loss = (
            counters.packets_lost / counters.packets_sent if counters.packets_sent > 0 else 0.0
        )
        return ClientStats(
            incoming_total=counters.incoming_total,
            total_received=counters.total_received,
            outgoing_total=counters.outgoing_total,
            total_sent=counters.total_sent,
            incoming_bandwidth=self._incoming,
            outgoing_bandwidth=self._outgoing,
            packets_sent=counters.packets_sent,
            packets_lost=counters.packets_lost,
            packet_loss=loss,
            ping=counters.round_trip_time,
            low_ping=counters.lowest_round_trip_time,
        )