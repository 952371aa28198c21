import pytest

from ecoframe.profiler import Profiler, ProfilerKind


def make_clock(times):
    values = iter(times)
    return lambda: next(values)


def test_names():
    prof = Profiler()
    assert prof.name(ProfilerKind.MAIN_LOOP) == "main loop"
    assert prof.name(ProfilerKind.RENDER_PUSH_AND_SORT_ENTRIES) == "push&sort entries"


def test_every_kind_has_a_name():
    prof = Profiler()
    assert all(prof.name(kind) for kind in ProfilerKind)


def test_average_after_window():
    prof = Profiler(clock=make_clock([1.0, 1.25, 2.0, 2.25]), warmup=0)
    prof.start(ProfilerKind.MAIN_LOOP)
    prof.stop(ProfilerKind.MAIN_LOOP)
    prof.start(ProfilerKind.MAIN_LOOP)
    prof.stop(ProfilerKind.MAIN_LOOP)
    prof.collate(0.5)
    assert prof.delta(ProfilerKind.MAIN_LOOP) == pytest.approx(0.25)
    assert prof.delta(ProfilerKind.TOTAL_TIME) == pytest.approx(0.5)
    assert prof.delta(ProfilerKind.RENDER) == 0.0


def test_no_update_before_window():
    prof = Profiler(clock=make_clock([0.0, 1.0]), warmup=0)
    prof.start(ProfilerKind.RENDER)
    prof.stop(ProfilerKind.RENDER)
    prof.collate(0.1)
    assert prof.delta(ProfilerKind.RENDER) == 0.0


def test_measure_context_manager():
    prof = Profiler(clock=make_clock([3.0, 3.5]), warmup=0)
    with prof.measure(ProfilerKind.WORLD_WRITE):
        pass
    prof.collate(1.0)
    assert prof.delta(ProfilerKind.WORLD_WRITE) == pytest.approx(0.5)


def test_warmup_discards_measurements():
    prof = Profiler(clock=make_clock([0.0, 1.0]), warmup=0.5)
    prof.start(ProfilerKind.MAIN_LOOP)
    prof.stop(ProfilerKind.MAIN_LOOP)
    prof.collate(0.6)
    prof.collate(0.6)
    assert prof.delta(ProfilerKind.MAIN_LOOP) == 0.0
    assert prof.delta(ProfilerKind.TOTAL_TIME) == pytest.approx(0.6)