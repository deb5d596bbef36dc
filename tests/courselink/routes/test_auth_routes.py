from courselink.main import app
from courselink.routes.auth_routes import me


def test_me_returns_current_identity(student) -> None:
    assert me(current_user=student) == {'id': student.id, 'email': 'student@example.edu', 'role': 'STUDENT'}


def test_app_registers_scheduling_routes() -> None:
    paths = set(app.openapi()['paths'])

    assert {
        '/',
        '/auth/me',
        '/booking-slots/generate',
        '/booking-slots/choose',
        '/booking-slots',
        '/defence-sessions',
        '/defence-sessions/{defence_session_id}',
    } <= paths
