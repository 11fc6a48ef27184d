import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.subscriptions.services import ensure_subscription


def make_account(email, referred_by=None, **extra):
    """Create an account the way signup does (with its free subscription)."""
    user = User.objects.create_user(
        email=email,
        password='TestPass123!',
        display_name=email.split('@')[0].title(),
        referred_by=referred_by,
        **extra,
    )
    ensure_subscription(account=user)
    return user


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def upline(db):
    """Top of the chain: referred the referrer."""
    return make_account('upline@example.com')


@pytest.fixture
def referrer(upline):
    """Referred by upline."""
    return make_account('referrer@example.com', referred_by=upline)


@pytest.fixture
def subscriber(referrer):
    """Referred by referrer: upline <- referrer <- subscriber."""
    return make_account('subscriber@example.com', referred_by=referrer)


@pytest.fixture
def loner(db):
    """Account without a referrer."""
    return make_account('loner@example.com')


@pytest.fixture
def referrer_client(api_client, referrer):
    """Return API client authenticated as the referrer."""
    refresh = RefreshToken.for_user(referrer)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
