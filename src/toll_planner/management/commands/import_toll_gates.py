from __future__ import annotations

from pathlib import Path
from typing import Any

import polars as pl
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from toll_planner.models import TollGate

GATE_TYPES = [choice.value for choice in TollGate.GateType]


class Command(BaseCommand):
    help = "Import and normalize toll gates from a CSV using Polars."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--csv-path",
            type=str,
            default=str(settings.PROJECT_ROOT / "data" / "karnataka_toll_gates.csv"),
            help="Path to the source toll gate CSV",
        )
        parser.add_argument(
            "--replace",
            action="store_true",
            help="Delete existing toll gates before importing",
        )

    def handle(self, *_: Any, **options: Any) -> None:
        csv_path = Path(options["csv_path"])
        if not csv_path.exists():
            raise CommandError(f"CSV file does not exist: {csv_path}")

        frame = self._load_and_transform(csv_path)
        records = frame.to_dicts()

        if options["replace"]:
            TollGate.objects.all().delete()

        existing = {
            gate.name: gate
            for gate in TollGate.objects.filter(name__in=[row["name"] for row in records])
        }

        to_create: list[TollGate] = []
        to_update: list[TollGate] = []

        for row in records:
            gate = existing.get(row["name"])
            if gate is None:
                to_create.append(TollGate(**row))
                continue

            for field, value in row.items():
                setattr(gate, field, value)
            to_update.append(gate)

        if to_create:
            TollGate.objects.bulk_create(to_create, batch_size=500)
        if to_update:
            TollGate.objects.bulk_update(
                to_update,
                ["latitude", "longitude", "cost_car", "cost_bike", "cost_truck", "gate_type"],
                batch_size=500,
            )

        self.stdout.write(
            self.style.SUCCESS(
                "Imported toll gates: "
                + (
                    f"{len(records)} rows normalized, "
                    f"{len(to_create)} created, {len(to_update)} updated"
                )
            )
        )

    @staticmethod
    def _load_and_transform(csv_path: Path) -> pl.DataFrame:
        frame = pl.read_csv(csv_path, infer_schema_length=1000)
        required_columns = {"name", "lat", "lng", "cost_car", "cost_bike", "cost_truck", "type"}
        missing_columns = required_columns.difference(frame.columns)
        if missing_columns:
            raise CommandError(f"Missing expected columns: {sorted(missing_columns)}")

        normalized = (
            frame.select(
                pl.col("name").cast(pl.Utf8, strict=False).str.strip_chars().alias("name"),
                pl.col("lat").cast(pl.Float64, strict=False).alias("latitude"),
                pl.col("lng").cast(pl.Float64, strict=False).alias("longitude"),
                pl.col("cost_car").cast(pl.Float64, strict=False).alias("cost_car"),
                pl.col("cost_bike")
                .cast(pl.Float64, strict=False)
                .fill_null(0.0)
                .alias("cost_bike"),
                pl.col("cost_truck").cast(pl.Float64, strict=False).alias("cost_truck"),
                pl.col("type")
                .cast(pl.Utf8, strict=False)
                .str.strip_chars()
                .str.to_titlecase()
                .fill_null("Highway")
                .alias("gate_type"),
            )
            .filter(
                pl.col("name").is_not_null()
                & (pl.col("name").str.len_chars() > 0)
                & pl.col("latitude").is_between(-90.0, 90.0)
                & pl.col("longitude").is_between(-180.0, 180.0)
                & pl.col("cost_car").is_not_null()
                & (pl.col("cost_car") >= 0)
                & (pl.col("cost_bike") >= 0)
                & (pl.col("cost_truck").is_null() | (pl.col("cost_truck") >= 0))
                & pl.col("gate_type").is_in(GATE_TYPES)
            )
            .unique(subset=["name"], keep="last", maintain_order=True)
        )

        return normalized
