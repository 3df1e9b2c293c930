import pytest

from treeviz.controller import AnimationController, clamp_speed
from treeviz.scene import Scene, Toast


def board(n, toast_at=None):
    scenes = []
    for i in range(n):
        toast = Toast("Found", f"step {i}") if i == toast_at else None
        scenes.append(Scene(action={"type": f"s{i}"}, toast=toast))
    return scenes


@pytest.fixture
def notices():
    return []


@pytest.fixture
def ctl(notices):
    return AnimationController(on_notice=notices.append)


def test_idle_shows_base_scene(ctl):
    assert ctl.current_scene == Scene()
    assert not ctl.is_animating
    assert ctl.total_steps == 0


def test_start_autoplays(ctl):
    assert ctl.start(board(3)) is True
    assert ctl.is_animating and ctl.is_playing
    assert ctl.current_step == 0
    assert ctl.total_steps == 2


def test_start_without_autoplay_waits():
    ctl = AnimationController(auto_play=False)
    ctl.start(board(3))
    assert ctl.is_animating and not ctl.is_playing
    assert ctl.tick() is False
    assert ctl.current_step == 0


def test_tick_runs_to_the_end(ctl):
    scenes = board(3)
    ctl.start(scenes)
    assert ctl.tick() is True
    assert ctl.tick() is True
    assert ctl.current_step == 2
    assert not ctl.is_animating and not ctl.is_playing
    assert ctl.tick() is False
    assert ctl.base_scene is scenes[-1]


def test_busy_controller_rejects_new_storyboard(ctl, notices):
    first = board(3)
    ctl.start(first)
    assert ctl.start(board(2)) is False
    assert ctl.scenes == first
    assert notices[-1].title == "Animation in progress"
    assert notices[-1].destructive


def test_single_scene_finishes_immediately(ctl):
    ctl.start(board(1))
    assert not ctl.is_animating
    assert ctl.start(board(2)) is True


def test_toasts_delivered_while_animating_only(ctl, notices):
    ctl.start(board(3, toast_at=1))
    ctl.tick()
    assert [t.description for t in notices] == ["step 1"]
    ctl.tick()
    ctl.go_to_step(1)
    # scrubbing a finished storyboard does not repeat notices
    assert len(notices) == 1
    assert ctl.current_scene.toast.description == "step 1"


def test_scrubbing_pauses(ctl):
    ctl.start(board(5))
    ctl.step_forward()
    assert ctl.current_step == 1 and not ctl.is_playing
    ctl.step_back()
    ctl.step_back()
    assert ctl.current_step == 0
    ctl.go_to_step(99)
    assert ctl.current_step == 0
    ctl.fast_forward()
    assert ctl.current_step == 4 and not ctl.is_animating
    ctl.rewind()
    assert ctl.current_step == 0
    assert ctl.can_step_forward and not ctl.can_step_back


def test_toggle_play_pause(ctl):
    ctl.start(board(3))
    ctl.toggle_play_pause()
    assert not ctl.is_playing
    ctl.toggle_play_pause()
    assert ctl.is_playing
    ctl.fast_forward()
    ctl.toggle_play_pause()
    assert not ctl.is_playing


def test_reset_to_scene(ctl):
    ctl.start(board(3))
    base = Scene(action={"type": "base"})
    ctl.reset_to_scene(base)
    assert ctl.current_scene is base
    assert not ctl.is_animating and ctl.scenes == []


@pytest.mark.parametrize("speed, interval", [(1, 1125), (3, 750), (5, 375)])
def test_interval_scales_with_speed(speed, interval):
    assert AnimationController(speed=speed).interval_ms == interval


def test_speed_is_clamped():
    ctl = AnimationController(speed=42)
    assert ctl.speed == 5
    ctl.set_speed(0)
    assert ctl.speed == 1
    assert clamp_speed("4") == 4
