import os


def _engine_options(database_uri, timeout_sec):
    """Bound how long a store call may wait on the database."""
    if database_uri.startswith('sqlite'):
        return {'connect_args': {'timeout': timeout_sec}}
    options = {'pool_pre_ping': True, 'pool_timeout': timeout_sec}
    if database_uri.startswith('postgresql'):
        options['connect_args'] = {'connect_timeout': max(1, int(timeout_sec))}
    return options


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///codewords.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Upper bound for a single store round trip (seconds)
    STORE_TIMEOUT_SEC = float(os.environ.get('STORE_TIMEOUT_SEC', '5'))
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options(SQLALCHEMY_DATABASE_URI, STORE_TIMEOUT_SEC)
    # 'sql' keeps sessions in the database, 'memory' keeps them in-process
    STORE_BACKEND = os.environ.get('STORE_BACKEND', 'sql')
    # Session records expire this long after their last write
    SESSION_TTL_SEC = int(os.environ.get('SESSION_TTL_SEC', str(60 * 60 * 24)))
    SESSION_KEY_PREFIX = os.environ.get('SESSION_KEY_PREFIX', 'game:')
    # Retry budget for transient store failures
    STORE_RETRY_ATTEMPTS = int(os.environ.get('STORE_RETRY_ATTEMPTS', '3'))
    STORE_RETRY_BACKOFF_MS = int(os.environ.get('STORE_RETRY_BACKOFF_MS', '50'))
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
        ).split(',')
        if origin.strip()
    ]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
