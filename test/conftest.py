import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


FIXED_NOW = datetime(2024, 5, 10, 14, 30, 0, tzinfo=timezone.utc)


def fixed_ids():
    from gestorpro.domain.ids import IdGenerator

    return IdGenerator(clock=lambda: FIXED_NOW)


def product_record(pid: str, description: str, quantity: int, buy: float = 10.0, margin: float = 50.0) -> dict:
    return {
        "id": pid,
        "description": description,
        "category": "General",
        "quantity": quantity,
        "buyPrice": buy,
        "margin": margin,
        "sellPrice": buy * (1 + margin / 100),
    }
