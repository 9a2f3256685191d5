import pytest

from movieExplorer.settings import ConfigError, MISSING_KEY_MESSAGE
from movieExplorer.gui.controller import QueryController
from movieExplorer.metadata.core.models import SortKey, ViewStatus

from conftest import FakeResponse, listing


def _titles(controller):
    return [r.title for r in controller.results]


def _started(controller, runner):
    controller.start()
    runner.last.resolve()
    return controller


def test_start_fetches_discover(controller, runner, session):
    controller.start()
    assert len(runner.jobs) == 1
    assert controller.status() is ViewStatus.LOADING
    assert not controller.can_go_next()

    runner.last.resolve()
    assert "/discover/movie" in session.calls[0][0]
    assert _titles(controller) == ["discover p1"]
    assert controller.total_pages == 3
    assert controller.status() is ViewStatus.READY
    assert controller.mode_label() == "Discover movies"


def test_submit_search_targets_search_and_resets_page(controller, runner, session):
    _started(controller, runner)
    controller.next_page()
    runner.last.resolve()
    assert controller.state.page == 2

    controller.submit_search("  alien ")
    assert controller.state.page == 1
    assert controller.state.submitted_query == "alien"
    assert controller.results == []                 # cleared before new data
    assert controller.status() is ViewStatus.LOADING

    runner.last.resolve()
    assert "/search/movie" in session.calls[-1][0]
    assert "query=alien" in session.calls[-1][0]
    assert _titles(controller) == ["alien p1"]
    assert controller.mode_label() == "Search results for: alien"


def test_sort_change_never_fetches(controller, runner, session):
    session.queued.append(FakeResponse(200, {
        "results": [
            {"id": 1, "title": "A", "release_date": "2020-01-01", "vote_average": 5},
            {"id": 2, "title": "B", "release_date": "1999-01-01", "vote_average": 8},
        ],
    }))
    _started(controller, runner)
    views = []
    controller.view_changed.connect(lambda: views.append(1))

    for key in ("rating-desc", SortKey.DATE_ASC, SortKey.NONE):
        controller.set_sort(key)
    assert len(runner.jobs) == 1
    assert len(session.calls) == 1
    assert len(views) == 3

    controller.set_sort(SortKey.RATING_DESC)
    assert [d.title for d in controller.display_records()] == ["B", "A"]
    assert _titles(controller) == ["A", "B"]        # raw results keep server order


def test_page_change_clears_results_first(controller, runner):
    _started(controller, runner)
    seen = []
    controller.results_changed.connect(lambda rs: seen.append([r.title for r in rs]))

    assert controller.next_page()
    assert controller.results == []
    runner.last.resolve()
    assert seen == [[], ["discover p2"]]


def test_pagination_guards(controller, runner):
    controller.start()
    assert not controller.can_go_previous()
    assert not controller.previous_page()
    assert not controller.can_go_next()             # loading
    assert not controller.next_page()

    runner.last.resolve()
    assert controller.next_page()
    runner.last.resolve()
    assert controller.can_go_previous()
    assert controller.next_page()
    runner.last.resolve()
    assert controller.state.page == 3               # total_pages == 3
    assert not controller.can_go_next()
    assert not controller.next_page()

    assert controller.previous_page()
    assert controller.state.page == 2


def test_unknown_page_bound_leaves_next_enabled(controller, runner, session):
    session.queued.append(FakeResponse(200, listing(["only"])))
    _started(controller, runner)
    assert controller.total_pages is None
    assert controller.can_go_next()


def test_search_page_bound_is_honoured(controller, runner, session):
    _started(controller, runner)
    session.queued.append(FakeResponse(200, listing(["x"], total_pages=1)))
    controller.submit_search("x")
    runner.last.resolve()
    assert controller.total_pages == 1
    assert not controller.can_go_next()


def test_superseded_result_is_dropped(controller, runner):
    _started(controller, runner)
    controller.next_page()                          # request X
    x = runner.last
    controller.submit_search("heat")                # request Y, before X resolves
    y = runner.last
    assert y.generation > x.generation

    y.resolve()
    x.resolve()                                     # X lands late
    assert _titles(controller) == ["heat p1"]
    assert controller.state.page == 1
    assert controller.status() is ViewStatus.READY


def test_superseded_failure_is_dropped(controller, runner, session, tmp_log):
    _started(controller, runner)
    controller.submit_search("a")
    x = runner.last
    controller.submit_search("b")
    y = runner.last

    y.resolve()
    session.queued.append(FakeResponse(500))
    x.resolve()
    assert controller.error == ""
    assert _titles(controller) == ["b p1"]
    assert "dropping superseded" in tmp_log.read_text(encoding="utf-8")


def test_request_failure_is_recoverable(controller, runner, session):
    session.queued.append(FakeResponse(503))
    controller.start()
    runner.last.resolve()
    assert controller.error == "TMDB request failed (503)"
    assert controller.status() is ViewStatus.ERROR
    assert not controller.loading

    assert controller.retry()
    assert controller.error == ""                   # cleared on the next attempt
    runner.last.resolve()
    assert controller.status() is ViewStatus.READY
    assert not controller.retry()


def test_resubmitting_after_failure_refetches(controller, runner, session):
    _started(controller, runner)
    session.queued.append(FakeResponse(500))
    controller.submit_search("heat")
    runner.last.resolve()
    assert controller.error

    controller.submit_search("heat")
    assert len(runner.jobs) == 3
    runner.last.resolve()
    assert _titles(controller) == ["heat p1"]


def test_unchanged_submit_does_not_refetch(controller, runner):
    _started(controller, runner)
    controller.submit_search("heat")
    runner.last.resolve()
    controller.submit_search("heat")
    assert len(runner.jobs) == 2


def test_clear_search_returns_to_discover(controller, runner, session):
    _started(controller, runner)
    controller.submit_search("heat")
    runner.last.resolve()
    controller.clear_search()
    assert controller.state.submitted_query == ""
    assert controller.state.search_text == ""
    runner.last.resolve()
    assert "/discover/movie" in session.calls[-1][0]


def test_search_text_alone_does_not_fetch(controller, runner):
    _started(controller, runner)
    controller.set_search_text("hea")
    assert controller.state.search_text == "hea"
    assert controller.state.submitted_query == ""
    assert len(runner.jobs) == 1
    controller.submit_search()
    assert controller.state.submitted_query == "hea"
    assert len(runner.jobs) == 2


def test_empty_results_show_empty_state(controller, runner, session):
    session.queued.append(FakeResponse(200, {"results": [], "total_pages": 0}))
    _started(controller, runner)
    assert controller.status() is ViewStatus.EMPTY
    assert controller.error == ""


def test_go_to_page(controller, runner):
    _started(controller, runner)
    assert controller.go_to_page(3)
    assert controller.state.page == 3
    runner.last.resolve()
    with pytest.raises(ValueError):
        controller.go_to_page(4)
    with pytest.raises(ValueError):
        controller.go_to_page(0)


def _missing_key():
    raise ConfigError(MISSING_KEY_MESSAGE)


def test_config_error_disables_everything(runner):
    controller = QueryController.from_settings(_missing_key, runner=runner)
    errors = []
    controller.error_changed.connect(errors.append)

    controller.start()
    controller.submit_search("heat")
    controller.next_page()
    controller.clear_search()
    assert not controller.retry()
    assert not controller.go_to_page(2)

    assert runner.jobs == []
    assert errors == [MISSING_KEY_MESSAGE]
    assert controller.status() is ViewStatus.CONFIG_ERROR
    assert controller.error == MISSING_KEY_MESSAGE
    assert not controller.can_go_next()
    assert not controller.can_go_previous()


def test_launch_is_logged_without_key(controller, runner, tmp_log):
    controller.start()
    text = tmp_log.read_text(encoding="utf-8")
    assert "/discover/movie" in text
    assert "test-key" not in text


def test_needs_client_or_config_error():
    with pytest.raises(ValueError):
        QueryController(None)
