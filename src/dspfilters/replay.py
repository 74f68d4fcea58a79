"""
IMU Replay Driver

Thin glue between recorded inertial-sensor logs and a FilterChain.

Input records are CSV lines ``t,wx,wy,wz,ax,ay,az`` (timestamp, gyroscope,
accelerometer). Every channel keeps a bounded buffer of its most recent
samples; after each record the chain is re-applied to every channel's fully
materialized buffer and the last filtered value is reported:

    $GYRACC,wx,wy,wz,ax,ay,az,t/1000
"""

from __future__ import annotations

import copy
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from dspfilters.core.logging import get_logger
from dspfilters.filters.chain import FilterChain

logger = get_logger(__name__)

CHANNELS = ("wx", "wy", "wz", "ax", "ay", "az")


@dataclass(slots=True, frozen=True)
class ImuRecord:
    """
    One IMU sample.

    Attributes:
        timestamp: Sensor timestamp (milliseconds in recorded logs)
        wx, wy, wz: Angular rates
        ax, ay, az: Accelerations
    """
    timestamp: float
    wx: float
    wy: float
    wz: float
    ax: float
    ay: float
    az: float

    def channel(self, name: str) -> float:
        return getattr(self, name)


def parse_record(line: str) -> ImuRecord:
    """
    Parse one ``t,wx,wy,wz,ax,ay,az`` line; extra fields are ignored.

    Raises:
        ValueError: Missing or non-numeric fields
    """
    fields = line.strip().split(",")
    if len(fields) < 1 + len(CHANNELS):
        raise ValueError(f"Expected {1 + len(CHANNELS)} fields, got {len(fields)}: {line!r}")

    try:
        values = [float(value) for value in fields[:1 + len(CHANNELS)]]
    except ValueError as e:
        raise ValueError(f"Invalid data in line: {line!r}") from e

    return ImuRecord(*values)


def format_output(header: str, values: Sequence[float], timestamp: float) -> str:
    """Render one output line with %g number formatting."""
    parts = [header, *(f"{v:g}" for v in values), f"{timestamp:g}"]
    return ",".join(parts)


@dataclass
class ImuReplay:
    """
    Per-channel bounded buffers re-filtered after every record.

    Every channel runs its own copy of the chain, so a filter that rejects a
    buffer never reports samples from another channel.

    Usage:
        replay = ImuReplay(create_filter_chain([{"kind": "median", "window_size": 16}]))
        for record in records:
            latest = replay.update(record)
    """

    chain: FilterChain
    buffer_size: int = 128

    _buffers: dict[str, deque[float]] = field(init=False, repr=False)
    _chains: dict[str, FilterChain] = field(init=False, repr=False)
    _record_count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self._buffers = {name: deque(maxlen=self.buffer_size) for name in CHANNELS}
        self._chains = {name: copy.deepcopy(self.chain) for name in CHANNELS}

    def update(self, record: ImuRecord) -> dict[str, float]:
        """
        Push one record and filter every channel buffer.

        Returns:
            Last filtered value per channel (0.0 when the chain yields nothing)
        """
        self._record_count += 1
        latest: dict[str, float] = {}
        for name in CHANNELS:
            buffer = self._buffers[name]
            buffer.append(record.channel(name))

            chain = self._chains[name]
            chain.set_signal(list(buffer))
            chain.apply_filters()
            filtered = chain.get_filtered_signal()
            latest[name] = float(filtered[-1]) if len(filtered) else 0.0

        return latest

    def buffer(self, name: str) -> list[float]:
        """Current samples of one channel, oldest first."""
        return list(self._buffers[name])

    @property
    def record_count(self) -> int:
        return self._record_count


def replay_lines(
    lines: Iterable[str],
    replay: ImuReplay,
    header: str = "$GYRACC",
    timestamp_scale: float = 1000.0,
) -> Iterator[str]:
    """
    Replay raw log lines through the driver.

    Blank lines are skipped; malformed lines are logged and skipped.

    Yields:
        One formatted output line per valid record
    """
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        try:
            record = parse_record(line)
        except ValueError as e:
            logger.warning("Skipping malformed record", line_no=line_no, error=str(e))
            continue

        latest = replay.update(record)
        yield format_output(
            header,
            [latest[name] for name in CHANNELS],
            record.timestamp / timestamp_scale,
        )
