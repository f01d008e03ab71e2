from expense_tracker.api_client import ApiError
from expense_tracker.session import (
    AppState,
    authenticate,
    get_api,
    init_app_state,
    login,
    logout,
)

USERS = [
    {'id': 1, 'username': 'demo', 'password': 'demo123'},
    {'id': 2, 'username': 'alex', 'password': 'secret'},
]


class FakeAPI:
    def __init__(self, users=None, error=None):
        self.users = users or []
        self.error = error

    def list_users(self):
        if self.error is not None:
            raise self.error
        return self.users


def test_authenticate_requires_exact_pair():
    assert authenticate(USERS, 'demo', 'demo123')
    assert not authenticate(USERS, 'demo', 'secret')
    assert not authenticate(USERS, 'DEMO', 'demo123')
    assert not authenticate([], 'demo', 'demo123')


def test_login_with_demo_credentials(toasts):
    state = AppState()

    assert login(FakeAPI(USERS), state, 'demo', 'demo123')

    assert state.authenticated
    assert state.username == 'demo'
    assert toasts == ['Login successful!']


def test_login_with_wrong_password(toasts):
    state = AppState()

    assert not login(FakeAPI(USERS), state, 'demo', 'nope')

    assert not state.authenticated
    assert toasts == ['Invalid credentials']


def test_login_when_endpoint_unreachable(toasts):
    state = AppState()
    api = FakeAPI(error=ApiError('GET', '/users', 'connection refused'))

    assert not login(api, state, 'demo', 'demo123')

    assert not state.authenticated
    assert toasts == ['Login failed']


def test_logout_resets_authentication_but_keeps_theme():
    state = AppState(theme='dark', authenticated=True, username='demo')

    logout(state)

    assert not state.authenticated
    assert state.username is None
    assert state.theme == 'dark'


def test_toggle_theme():
    state = AppState()
    assert state.toggle_theme() == 'dark'
    assert state.toggle_theme() == 'light'


def test_init_app_state_is_created_once():
    store = {}
    first = init_app_state(store)
    first.theme = 'dark'

    assert init_app_state(store) is first
    assert first.authenticated is False


def test_get_api_is_reused_per_session():
    store = {}
    assert get_api(store) is get_api(store)
