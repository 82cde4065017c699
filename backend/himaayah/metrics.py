"""
In-process counters for observability. Process-local; for multi-worker use external metrics (e.g. Prometheus).
"""
import threading

# Rejected logins (unknown email or wrong password).
login_failures_total: int = 0
_login_failures_lock = threading.Lock()


def increment_login_failures_total() -> int:
    """Increment login_failures_total; return new value. Thread-safe."""
    global login_failures_total
    with _login_failures_lock:
        login_failures_total += 1
        return login_failures_total
