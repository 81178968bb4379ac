import time
from typing import Set, Tuple

from fruitbox import get_game_state, socketio
from fruitbox.socketio_events import SESSION_ROOM


_scheduled_rounds: Set[Tuple[int, int]] = set()  # (id(state), round)


def schedule_round_timer(app, round_idx: int) -> None:
    """Schedule the countdown for the given round.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Ensures a single timer per (session, round)
    - Emits timer_tick every TIMER_HEARTBEAT_SEC if enabled
    - On expiry, folds totals into the best-scores table and emits round_over,
      unless a newer round has started in the meantime
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return

    duration = int(app.config.get('ROUND_DURATION_SEC', 120))
    key = (id(get_game_state(app)), round_idx)
    if key in _scheduled_rounds:
        app.logger.info(f"[timer-skip] round={round_idx} already scheduled")
        return
    _scheduled_rounds.add(key)
    app.logger.info(f"[timer-set] round={round_idx} duration={duration}s")

    def _worker(expected_round: int, delay: int):
        try:
            _run_countdown(expected_round, delay)
        finally:
            _scheduled_rounds.discard(key)

    def _run_countdown(expected_round: int, delay: int):
        try:
            hb = int(app.config.get('TIMER_HEARTBEAT_SEC', 0))
        except (TypeError, ValueError):
            hb = 0
        if hb > 0:
            remaining = delay
            while remaining > 0:
                if get_game_state(app).current_round != expected_round:
                    break
                socketio.emit('timer_tick', {'round': expected_round, 'remaining_secs': remaining},
                              to=SESSION_ROOM, namespace='/ws')
                app.logger.debug(f"[timer-tick] round={expected_round} remaining={remaining}s")
                step = min(hb, remaining)
                time.sleep(step)
                remaining -= step
        else:
            time.sleep(delay)

        state = get_game_state(app)
        app.logger.info(f"[timer-fire] expected_round={expected_round} actual_round={state.current_round}")
        if state.current_round != expected_round:
            app.logger.info(f"[timer-abort] round={expected_round} superseded")
            return

        top = state.record_round_results()
        socketio.emit('round_over', {
            'round': expected_round,
            'scores': state.current_totals(),
            'top_scores': [[score, name] for score, name in top],
        }, to=SESSION_ROOM, namespace='/ws')

    if app.config.get('TESTING'):
        _worker(round_idx, duration)
    else:
        socketio.start_background_task(_worker, round_idx, duration)
