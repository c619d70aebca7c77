"""Statistic catalogue endpoint."""

from typing import Any

from fastapi import APIRouter

from ...core.statistics import Statistic

router = APIRouter()


@router.get("")
async def list_statistics() -> list[dict[str, Any]]:
    """List plottable statistics and the series each one produces."""
    return [
        {
            "key": stat.value,
            "label": stat.label,
            "series": [field.label for field in stat.fields],
        }
        for stat in Statistic
    ]
