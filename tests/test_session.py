import pytest

from artcore.aggregate import AggregationEntry
from artcore.errors import FetchError, NoDataError, ParseError
from artcore.features import Feature
from artcore.filters import ChartFilters, normalize_filters
from artcore.session import DashboardController, DashboardState


def _loader_for(records, calls=None):
    def _load(source):
        if calls is not None:
            calls.append(source)
        return records
    return _load


def _failing(exc):
    def _load(source):
        raise exc
    return _load


def test_initial_state_is_loading():
    state = DashboardState()
    assert state.loading
    assert not state.ready
    assert state.entries == ()


def test_load_computes_default_feature(sample_records):
    controller = DashboardController("x.csv", loader=_loader_for(sample_records))
    state = controller.load()
    assert state.ready
    assert state.record_count == 3
    assert state.feature is Feature.GENRE
    assert state.entries == (AggregationEntry("Poster", 2), AggregationEntry("Print", 1))


def test_load_is_single_attempt(sample_records):
    calls = []
    controller = DashboardController("x.csv", loader=_loader_for(sample_records, calls))
    controller.load()
    controller.load()
    assert calls == ["x.csv"]


def test_failed_load_is_terminal():
    calls = []

    def _load(source):
        calls.append(source)
        raise FetchError("Failed to fetch CSV: 404 Not Found")

    controller = DashboardController("x.csv", loader=_load)
    state = controller.load()
    controller.load()
    assert calls == ["x.csv"]
    assert not state.ready
    assert state.error == "Error loading file: Failed to fetch CSV: 404 Not Found"
    assert state.error_type == "FetchError"
    assert controller.payload() is None
    assert controller.select_feature("location").entries == ()


@pytest.mark.parametrize(
    "exc, message",
    [
        (FetchError("boom"), "Error loading file: boom"),
        (ParseError("source is empty"), "Error parsing CSV: source is empty"),
        (NoDataError(), "No data found in the CSV file"),
    ],
)
def test_error_messages_distinct(exc, message):
    controller = DashboardController(loader=_failing(exc))
    state = controller.load()
    assert state.error == message
    assert state.error_type == type(exc).__name__


def test_select_feature_recomputes(sample_records):
    controller = DashboardController(loader=_loader_for(sample_records))
    controller.load()
    before = controller.state
    after = controller.select_feature("year")
    assert after.feature is Feature.YEAR_DECADE
    assert after.entries == (AggregationEntry("1920s", 1), AggregationEntry("1930s", 1))
    # previous state is replaced, not edited
    assert before.feature is Feature.GENRE
    assert before.entries == (AggregationEntry("Poster", 2), AggregationEntry("Print", 1))


def test_feature_selected_while_loading_is_queued(sample_records):
    controller = DashboardController(loader=_loader_for(sample_records))
    queued = controller.select_feature(Feature.PHYSICAL_FORM)
    assert queued.loading
    assert queued.entries == ()
    assert controller.payload() is None
    state = controller.load()
    assert state.feature is Feature.PHYSICAL_FORM
    assert state.entries[0] == AggregationEntry("Posters", 2)


def test_apply_filters_sets_chart_type_and_feature(sample_records):
    controller = DashboardController(loader=_loader_for(sample_records))
    controller.load()
    state = controller.apply_filters(ChartFilters(feature=Feature.CLASSIFICATION, chart_type="pie"))
    assert state.chart_type == "pie"
    assert state.feature is Feature.CLASSIFICATION
    assert state.entries[0] == AggregationEntry("Graphic Design", 2)
    state = controller.apply_filters(normalize_filters({"feature": "nope", "chart_type": "line"}))
    assert state.feature is Feature.GENRE
    assert state.chart_type == "bar"


def test_unknown_feature_rejected(sample_records):
    controller = DashboardController(loader=_loader_for(sample_records))
    controller.load()
    with pytest.raises(ValueError):
        controller.select_feature("colour")
    with pytest.raises(ValueError):
        controller.select_chart_type("line")


def test_payload_shapes(sample_records):
    controller = DashboardController(loader=_loader_for(sample_records))
    controller.load()
    controller.select_chart_type("pie")
    payload = controller.payload()
    assert payload["feature"] == "genre"
    assert payload["chart_kind"] == "ranked-categorical"
    assert payload["chart_type"] == "pie"
    assert payload["title"] == "Top 10 Genres in the Collection"
    assert payload["entries"] == [{"label": "Poster", "count": 2}, {"label": "Print", "count": 1}]

    controller.select_feature("year_decade")
    payload = controller.payload()
    assert payload["chart_kind"] == "ordered-series"
    assert payload["chart_type"] == "bar"
    assert payload["title"] == "Publication Years Distribution"


def test_payload_no_data_state(sample_records):
    records = sample_records.drop(columns=["field_genre"])
    controller = DashboardController(loader=_loader_for(records))
    controller.load()
    payload = controller.payload(include_spec=True)
    assert payload["has_data"] is False
    assert payload["entries"] == []
    assert payload["message"] == "No data available for this feature"
    assert payload["chart"] is None
