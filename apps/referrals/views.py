from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import DashboardSerializer, CommissionCreditSerializer
from .models import CommissionCredit
from .services import (
    get_dashboard,
    generate_referral_code,
    # Exceptions
    AccountNotFoundError,
    ReferralCodeGenerationError,
)


class ReferralCodeResponseSerializer(serializers.Serializer):
    referral_code = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    responses={200: DashboardSerializer, 404: ErrorResponseSerializer},
    description="Referral history, withdrawal history and wallet of the current user.",
    tags=['referrals'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Get the referral dashboard for the current user."""
    try:
        data = get_dashboard(account=request.user)
    except AccountNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(DashboardSerializer(data).data)


@extend_schema(
    request=None,
    responses={200: ReferralCodeResponseSerializer, 503: ErrorResponseSerializer},
    description="Generate (or return the existing) referral code of the current user.",
    tags=['referrals'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def referral_code(request):
    """Generate the current user's referral code."""
    try:
        code = generate_referral_code(account=request.user)
    except AccountNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except ReferralCodeGenerationError as e:
        return Response({'error': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return Response({'referral_code': code})


@extend_schema(
    responses={200: CommissionCreditSerializer(many=True)},
    description="Commissions credited to the current user, newest first.",
    tags=['referrals'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_commissions(request):
    """List commissions credited to the current user."""
    credits = CommissionCredit.objects.filter(beneficiary=request.user)
    serializer = CommissionCreditSerializer(credits, many=True)
    return Response(serializer.data)
