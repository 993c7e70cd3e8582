from __future__ import annotations

import copy
import sys
from pathlib import Path

import httpx
import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

POINTER_URL = "https://resources.example.com/dburl.txt"
DATABASE_URL = "https://rotations.example.com/db.json"

ACTION_TABLE = """ClassName,ActionName,GameIdx,DBIdx
Warrior,Skull Sunder,12,501
Warrior,"Heavy Swing, upgraded",12,502
Warrior,Maim,31,502
WhiteMage,Stone,119,601
"""

DOCUMENT = {
    "skills": {
        "501": {"name": "Heavy Swing", "icon": "heavy_swing.png", "cooldown": 2.5},
        "502": {"name": "Maim", "deprecated": "0"},
        "503": {"name": "Skull Sunder", "deprecated": "1"},
        "601": {"name": "Stone", "deprecated": ""},
        "701": {"name": "Basic Synthesis"},
        "777": {"name": "Grade 8 Tincture"},
    },
    "classes": {
        "Warrior": {"discipline": "war", "name": "Warrior", "combo": [501, 502, 503], "ogcd": [501, 404]},
        "WhiteMage": {"discipline": "magic", "gcd": [601]},
        "Carpenter": {"discipline": "hand", "actions": [701]},
    },
    "misc": [777],
}


def make_handler(document=None, pointer_body: str = DATABASE_URL + "\n", calls: list | None = None):
    """Serve the pointer file and the database document from memory."""
    document = DOCUMENT if document is None else document

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(str(request.url))
        if str(request.url) == POINTER_URL:
            return httpx.Response(200, text=pointer_body)
        if str(request.url) == DATABASE_URL:
            if isinstance(document, str):
                return httpx.Response(200, text=document)
            return httpx.Response(200, json=document)
        return httpx.Response(404, text="not found")

    return handler


@pytest.fixture
def document() -> dict:
    return copy.deepcopy(DOCUMENT)


@pytest.fixture
def action_table_path(tmp_path: Path) -> Path:
    path = tmp_path / "ActionTable.csv"
    path.write_text(ACTION_TABLE, encoding="utf-8")
    return path
