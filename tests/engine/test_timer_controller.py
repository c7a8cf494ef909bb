from engine.timer_controller import TimerController
from models.enums import TimerStatus


def test_initial_state_is_idle_at_zero():
    controller = TimerController()
    assert controller.status == TimerStatus.IDLE
    assert controller.elapsed_seconds == 0


def test_start_pause_resume_keeps_elapsed():
    controller = TimerController()
    assert controller.start() is True
    controller.tick()
    controller.tick()
    assert controller.pause() is True
    assert controller.status == TimerStatus.PAUSED
    assert controller.elapsed_seconds == 2

    assert controller.start() is True
    assert controller.status == TimerStatus.RUNNING
    assert controller.elapsed_seconds == 2


def test_double_start_and_pause_are_no_ops():
    controller = TimerController()
    controller.start()
    assert controller.start() is False
    assert controller.status == TimerStatus.RUNNING

    controller.pause()
    assert controller.pause() is False
    assert controller.status == TimerStatus.PAUSED


def test_pause_while_idle_is_ignored():
    controller = TimerController()
    assert controller.pause() is False
    assert controller.status == TimerStatus.IDLE


def test_tick_only_counts_while_running():
    controller = TimerController()
    assert controller.tick() is False
    assert controller.elapsed_seconds == 0

    controller.start()
    assert controller.tick() is True
    controller.pause()
    assert controller.tick() is False
    assert controller.tick() is False
    assert controller.elapsed_seconds == 1


def test_stop_returns_to_idle_from_anywhere():
    controller = TimerController()
    controller.start()
    controller.tick()
    assert controller.stop() is True
    assert controller.status == TimerStatus.IDLE
    assert controller.elapsed_seconds == 0

    # Already idle at zero
    assert controller.stop() is False


def test_reset_keeps_status():
    controller = TimerController()
    controller.start()
    controller.tick()
    controller.tick()
    assert controller.reset() is True
    assert controller.status == TimerStatus.RUNNING
    assert controller.elapsed_seconds == 0

    controller.tick()
    controller.pause()
    controller.reset()
    assert controller.status == TimerStatus.PAUSED
    assert controller.elapsed_seconds == 0


def test_counts_past_the_limit_without_finishing():
    controller = TimerController()
    controller.start()
    for _ in range(400):
        controller.tick()
    assert controller.elapsed_seconds == 400
    assert controller.status == TimerStatus.RUNNING


def test_state_is_a_detached_snapshot():
    controller = TimerController()
    snapshot = controller.state
    controller.start()
    controller.tick()

    assert snapshot.elapsed_seconds == 0
    assert snapshot.status == TimerStatus.IDLE
    assert controller.state.to_dict() == {"elapsed_seconds": 1, "status": "RUNNING"}
