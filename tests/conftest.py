# tests/conftest.py
import pytest

from core.models import Alternative, Criterion, CriterionType


@pytest.fixture
def road_criteria():
    """The six road criteria the district started with (weights sum to 1)."""
    return [
        Criterion(key="pci", type=CriterionType.COST, weight=0.30, code="C1", name="PCI"),
        Criterion(key="volume", type=CriterionType.BENEFIT, weight=0.25, code="C2", name="Volume"),
        Criterion(key="keselamatan", type=CriterionType.COST, weight=0.15, code="C3", name="Keselamatan"),
        Criterion(key="biaya", type=CriterionType.COST, weight=0.12, code="C4", name="Biaya"),
        Criterion(key="fungsi", type=CriterionType.COST, weight=0.10, code="C5", name="Fungsi"),
        Criterion(key="penduduk", type=CriterionType.BENEFIT, weight=0.08, code="C6", name="Penduduk"),
    ]


@pytest.fixture
def roads():
    """Four roads with string-encoded values, as stored by the road form."""
    return [
        Alternative(
            id="r1", name="Jl. Merdeka",
            criteria_values={"pci": "35", "volume": "12000", "keselamatan": "4",
                             "biaya": "850.5", "fungsi": "1", "penduduk": "5400"},
        ),
        Alternative(
            id="r2", name="Jl. Sudirman",
            criteria_values={"pci": "72", "volume": "8000", "keselamatan": "2",
                             "biaya": "400", "fungsi": "2", "penduduk": "3100"},
        ),
        Alternative(
            id="r3", name="Jl. Diponegoro",
            criteria_values={"pci": "55", "volume": "3000", "keselamatan": "6",
                             "biaya": "1200", "fungsi": "3", "penduduk": "900"},
        ),
        Alternative(
            id="r4", name="Jl. Gatot Subroto",
            criteria_values={"pci": "90", "volume": "1500", "keselamatan": "1",
                             "biaya": "150", "fungsi": "4", "penduduk": "600"},
        ),
    ]


@pytest.fixture
def make_alternatives():
    """Build one alternative per value on a single criterion, ids a, b, c, ..."""
    def _make(values, key="c1"):
        return [
            Alternative(id=chr(ord("a") + i), criteria_values={key: v})
            for i, v in enumerate(values)
        ]
    return _make
