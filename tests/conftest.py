# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from artapi.main import app
from artcore.data import clear_collection_cache, parse_records


SAMPLE_CSV = """id,title,field_genre,field_date,field_place_published,field_place_published_objects,field_classification,field_physical_form
1,Travel to London,Poster,circa 1923-1925,London :,,Graphic Design,Posters|Lithographs--Color
2,Exposition,Poster,1931,"Paris, France :",,Graphic Design,Posters--Color
3,Untitled,Print,no date,,New York :,Books,Prints
"""


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_collection_cache()
    yield
    clear_collection_cache()


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV


@pytest.fixture
def sample_records():
    return parse_records(SAMPLE_CSV)


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "art_data.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


# --- Client bound to whatever ART_DATA_SOURCE points at ---
@pytest.fixture
def make_client(monkeypatch):
    def _make(source):
        monkeypatch.setenv("ART_DATA_SOURCE", str(source))
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client, csv_path):
    with make_client(csv_path) as c:
        yield c
