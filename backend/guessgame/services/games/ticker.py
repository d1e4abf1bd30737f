from typing import Dict

from guessgame import socketio
from .session import Status


# session_id -> generation of the ticker currently allowed to run
_active_tickers: Dict[str, int] = {}
_generation = 0


def start_ticker(app, session_id: str, session) -> None:
    """Push the running elapsed time to the session room while PLAYING.

    - No-ops in TESTING mode
    - At most one live ticker per session; starting again replaces the old one
    - The worker exits once stop_ticker() is called or the session leaves PLAYING
    """
    global _generation
    if app.config.get('TESTING') and not app.config.get('ENABLE_TICKER_IN_TESTS'):
        return

    _generation += 1
    generation = _generation
    _active_tickers[session_id] = generation
    interval = max(10, int(app.config.get('TICK_INTERVAL_MS', 100))) / 1000.0
    try:
        app.logger.info(f"[ticker-set] session={session_id} generation={generation} interval={interval}s")
    except Exception:
        pass

    def _worker(sid: str, gen: int):
        while _active_tickers.get(sid) == gen and session.status == Status.PLAYING:
            socketio.emit(
                'tick',
                {'session_id': sid, 'elapsed_time': round(session.elapsed_time, 1)},
                to=f"session:{sid}",
                namespace='/ws',
            )
            socketio.sleep(interval)
        if _active_tickers.get(sid) == gen:
            _active_tickers.pop(sid, None)
        try:
            app.logger.info(f"[ticker-exit] session={sid} generation={gen}")
        except Exception:
            pass

    socketio.start_background_task(_worker, session_id, generation)


def stop_ticker(session_id: str) -> None:
    _active_tickers.pop(session_id, None)


def is_ticking(session_id: str) -> bool:
    return session_id in _active_tickers
