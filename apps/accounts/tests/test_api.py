import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User
from apps.subscriptions.models import Subscription


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'tokens' in response.data
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_creates_free_subscription(self, api_client):
        """Every new account starts on the free plan."""
        url = reverse('users:register')
        data = {
            'email': 'free@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        subscription = Subscription.objects.get(account__email='free@example.com')
        assert subscription.plan == 'free'
        assert subscription.status == 'active'

    def test_register_with_referral_code(self, api_client, referrer):
        """Referral code attaches the new account to its referrer."""
        url = reverse('users:register')
        data = {
            'email': 'invited@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'referral_code': 'ref-abcde',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        invited = User.objects.get(email='invited@example.com')
        assert invited.referred_by == referrer
        assert str(response.data['user']['referred_by']) == str(referrer.id)

    def test_register_with_blank_referral_code(self, api_client):
        """Blank referral code means no referrer."""
        url = reverse('users:register')
        data = {
            'email': 'solo@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'referral_code': '',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(email='solo@example.com').referred_by is None

    def test_register_invalid_referral_code(self, api_client):
        """Unknown referral code is rejected and nothing is created."""
        url = reverse('users:register')
        data = {
            'email': 'lost@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'referral_code': 'NOPE-00000',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'invalid_referral_code'
        assert not User.objects.filter(email='lost@example.com').exists()

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        data = {
            'email': 'weak@example.com',
            'password': '123',
            'password_confirm': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Token Tests
# =============================================================================

@pytest.mark.django_db
class TestToken:
    """Tests for POST /api/auth/token/"""

    def test_obtain_token(self, api_client, user):
        response = api_client.post(reverse('token_obtain_pair'), {
            'email': 'testuser@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data

    def test_obtain_token_wrong_password(self, api_client, user):
        response = api_client.post(reverse('token_obtain_pair'), {
            'email': 'testuser@example.com',
            'password': 'WrongPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_obtain_token_inactive_user(self, api_client, user_inactive):
        response = api_client.post(reverse('token_obtain_pair'), {
            'email': 'inactive@example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestGetCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['wallet_balance'] == 0
        assert response.data['wallet_balance_display'] == '0.00'

    def test_wallet_fields_are_read_only(self, authenticated_client, user):
        """The profile endpoint exposes the wallet but never accepts writes."""
        url = reverse('users:current-user')
        response = authenticated_client.patch(url, {'wallet_balance': 999_999})

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        user.refresh_from_db()
        assert user.wallet_balance == 0

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Health Check Tests
# =============================================================================

@pytest.mark.django_db
class TestHealthCheck:
    """Tests for GET /api/health/"""

    def test_health(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok'}
