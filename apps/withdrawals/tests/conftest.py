import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.referrals.services import credit
from apps.withdrawals.models import WithdrawalRequest


def authenticate(client, user):
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def fund(account, amount):
    """Put commission money into an account's wallet."""
    credit(account_id=account.id, field='earnings', amount=amount)
    account.refresh_from_db()
    return account


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Staff',
        is_staff=True,
    )


@pytest.fixture
def earner(db):
    """Account holding 300,000 minor units of commission."""
    user = User.objects.create_user(
        email='earner@example.com',
        password='TestPass123!',
        display_name='Earner',
    )
    return fund(user, 300_000)


@pytest.fixture
def pending_withdrawal(earner) -> WithdrawalRequest:
    return WithdrawalRequest.objects.create(
        account=earner,
        amount=100_000,
        payout_destination='First Bank 0123456789',
    )


@pytest.fixture
def earner_client(api_client, earner):
    return authenticate(api_client, earner)


@pytest.fixture
def staff_client(api_client, staff_user):
    return authenticate(api_client, staff_user)
