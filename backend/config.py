import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Session board (fixed per process)
    RNG_SEED = int(os.environ.get('RNG_SEED', '0'))
    GRID_HEIGHT = int(os.environ.get('GRID_HEIGHT', '10'))
    GRID_WIDTH = int(os.environ.get('GRID_WIDTH', '17'))
    FRUIT_TYPES = int(os.environ.get('FRUIT_TYPES', '5'))
    # Reserved for a future round limit; reported but never advanced
    TOTAL_ROUNDS = int(os.environ.get('TOTAL_ROUNDS', '0'))
    # Round countdown (seconds)
    ROUND_DURATION_SEC = int(os.environ.get('ROUND_DURATION_SEC', '120'))
    # Optional: countdown tick interval (sec). 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
        ).split(',') if o.strip()
    ]
