#!/usr/bin/env python3
"""Decode Scout manufacturer data from the command line.

Usage
-----
    python scripts/decode_payload.py 310101E800
    python scripts/decode_payload.py --text "23.4, 45.2, 1.20, 650"
    python scripts/decode_payload.py --capture scan.jsonl

A capture file holds one JSON object per line::

    {"id": "AA:BB:CC:DD:EE:FF", "name": "Scout_F1Z2", "rssi": -67, "data": "3101..."}

Captures are replayed through an :class:`AdvertisementFeed` and the final
registry snapshot is printed.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from scoutstream import (  # noqa: E402
    Advertisement,
    AdvertisementFeed,
    DeviceRecord,
    DeviceRegistry,
    PayloadDecoder,
    PayloadFormat,
    ScoutConfig,
)

MISSING = "N/A"
COMPANY_PREFIX = bytes.fromhex("3101")


def _parse_hex(value: str) -> bytes:
    return bytes.fromhex(value.replace(" ", "").replace(":", ""))


def _fmt(value: Any, spec: str) -> str:
    if value is None:
        return MISSING
    return format(value, spec)


def _print_record(record: DeviceRecord) -> None:
    reading = record.last_reading
    location = record.location
    where = f"floor {location.floor} zone {location.zone}" if location else MISSING
    print(f"{record.display_name}  [{record.identifier}]")
    print(f"  rssi:        {record.signal_strength} dBm ({record.signal_bars}/3)")
    print(f"  location:    {where}")
    print(f"  last seen:   {record.last_seen.isoformat() if record.last_seen else MISSING}")
    print(f"  temperature: {_fmt(reading.temperature, '.1f')} °C ({reading.temperature_band.value})")
    print(f"  humidity:    {_fmt(reading.humidity, '.1f')} %")
    print(f"  velocity:    {_fmt(reading.velocity, '.2f')} m/s")
    print(f"  co2:         {_fmt(reading.co2, 'd')} ppm")


async def _replay(path: Path, config: ScoutConfig) -> tuple[DeviceRecord, ...]:
    registry = DeviceRegistry(config=config)
    feed = AdvertisementFeed(registry)
    consumer = asyncio.create_task(feed.run())

    with path.open(encoding="utf-8") as handle:
        for lineno, line in enumerate(handle, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                entry = json.loads(line)
                advertisement = Advertisement(
                    identifier=entry["id"],
                    name=entry.get("name"),
                    rssi=int(entry["rssi"]),
                    payload=_parse_hex(entry["data"]) if entry.get("data") else None,
                )
            except (KeyError, ValueError) as exc:
                print(f"{path}:{lineno}: skipped ({exc})", file=sys.stderr)
                continue
            await feed.put(advertisement)

    await feed.drain()
    feed.stop()
    await consumer
    return registry.snapshot()


def main() -> None:
    parser = argparse.ArgumentParser(description="Decode Scout advertisement payloads.")
    parser.add_argument("payloads", nargs="*", help="Manufacturer data as hex (company prefix included)")
    parser.add_argument("--text", action="store_true", help="Payloads are literal text; the 3101 company prefix is added")
    parser.add_argument("--capture", type=Path, help="Replay a JSON-lines capture file")
    parser.add_argument(
        "--format",
        choices=[member.value for member in PayloadFormat],
        default=PayloadFormat.AUTO.value,
        help="Payload encoding policy",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ScoutConfig.from_env(payload_format=args.format, payload_trace_enabled=args.verbose)

    if args.capture is not None:
        records = asyncio.run(_replay(args.capture, config))
        if not records:
            print("No Scout devices found.")
            return
        for record in records:
            _print_record(record)
        print(f"\n{len(records)} device(s).")
        return

    if not args.payloads:
        parser.error("give at least one payload or --capture")

    decoder = PayloadDecoder(config)
    for raw in args.payloads:
        try:
            payload = COMPANY_PREFIX + raw.encode("ascii") if args.text else _parse_hex(raw)
        except ValueError as exc:
            print(f"{raw}: skipped ({exc})", file=sys.stderr)
            continue
        reading = decoder.decode(payload)
        print(json.dumps({"payload": raw, **reading.present_fields()}))


if __name__ == "__main__":
    main()
