"""
Shared fixtures for CSV export and import tests.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import pytest

from recordcsv.models import CsvModel


class User(CsvModel):
    """Model with Japanese attribute names."""

    attribute_names = {
        "id": "ID",
        "name": "氏名",
        "email": "メールアドレス",
        "note": "備考",
    }


@dataclass
class UserRecord:
    id: int
    name: str
    email: Optional[str] = None
    note: Optional[str] = None
    social: Dict[str, str] = field(default_factory=dict)


@pytest.fixture
def user_model():
    """User model class (acts as the name resolver)."""
    return User


@pytest.fixture
def users():
    """Two user records with nested social accounts."""
    return [
        UserRecord(
            id=1,
            name="山田太郎",
            email="taro@example.com",
            note="",
            social={"twitter": "@taro", "github": "taro"},
        ),
        UserRecord(
            id=2,
            name="Suzuki, Hanako",
            email="hanako@example.com",
            note='She said "hi"\nthen left',
            social={"twitter": "@hanako", "github": "hanako"},
        ),
    ]


@pytest.fixture
def fixtures_dir():
    return Path(__file__).parent / "fixtures"
