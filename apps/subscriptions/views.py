from rest_framework import viewsets, mixins, status, serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, IsAdminUser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.referrals.services import AccountNotFoundError
from .models import SubscriptionRequest
from .serializers import (
    SubscriptionSerializer,
    SubscriptionRequestSerializer,
    SubscriptionRequestCreateSerializer,
    ApprovalResultSerializer,
    QuotaStatusSerializer,
)
from .services import (
    ensure_subscription,
    submit_subscription_request,
    approve_subscription,
    reject_subscription,
    get_quota_status,
    consume_quota,
    # Exceptions
    SubscriptionRequestNotFoundError,
    InsufficientPermissionsError,
    UnknownPlanError,
    DuplicateSubscriptionRequestError,
    UnknownFeatureError,
)


class RejectionResponseSerializer(serializers.Serializer):
    account_id = serializers.UUIDField()
    plan = serializers.CharField()
    status = serializers.CharField()


class SubscriptionRequestViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Upgrade requests.

    create: Request an upgrade to a paid plan
    list: Pending requests (staff only)
    approve: Approve a request and pay commissions (staff only)
    reject: Reject a request (staff only)
    """

    queryset = SubscriptionRequest.objects.select_related('account')
    serializer_class = SubscriptionRequestSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_permissions(self):
        if self.action == 'list':
            return [IsAuthenticated(), IsAdminUser()]
        return [IsAuthenticated()]

    @extend_schema(request=SubscriptionRequestCreateSerializer, responses={201: SubscriptionRequestSerializer})
    def create(self, request, *args, **kwargs):
        """Request an upgrade."""
        serializer = SubscriptionRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            sub_request = submit_subscription_request(
                account=request.user,
                plan=serializer.validated_data['plan'],
                proof_reference=serializer.validated_data.get('proof_reference', ''),
            )
        except UnknownPlanError as e:
            return Response({'error': str(e), 'code': 'unknown_plan'}, status=status.HTTP_400_BAD_REQUEST)
        except DuplicateSubscriptionRequestError as e:
            return Response({'error': str(e), 'code': 'duplicate_request'}, status=status.HTTP_409_CONFLICT)

        output_serializer = SubscriptionRequestSerializer(sub_request)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: ApprovalResultSerializer})
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Approve an upgrade request (staff only)."""
        try:
            result = approve_subscription(request_id=pk, admin=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (SubscriptionRequestNotFoundError, AccountNotFoundError) as e:
            return Response({'error': str(e), 'code': 'not_found'}, status=status.HTTP_404_NOT_FOUND)

        return Response(ApprovalResultSerializer(result).data)

    @extend_schema(request=None, responses={200: RejectionResponseSerializer})
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """Reject an upgrade request (staff only)."""
        try:
            subscription = reject_subscription(request_id=pk, admin=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (SubscriptionRequestNotFoundError, AccountNotFoundError) as e:
            return Response({'error': str(e), 'code': 'not_found'}, status=status.HTTP_404_NOT_FOUND)

        return Response({
            'account_id': str(subscription.account_id),
            'plan': subscription.plan,
            'status': subscription.status,
        })


@extend_schema(
    responses={200: SubscriptionSerializer},
    description="Get the current user's plan and usage counters.",
    tags=['subscriptions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_subscription(request):
    """Get the current user's subscription."""
    subscription = ensure_subscription(account=request.user)
    return Response(SubscriptionSerializer(subscription).data)


@extend_schema(
    responses={200: QuotaStatusSerializer},
    description="Get usage of a feature in the current cycle.",
    tags=['subscriptions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quota_status(request, feature):
    """Get quota status for a feature."""
    try:
        quota = get_quota_status(account=request.user, feature=feature)
    except UnknownFeatureError as e:
        return Response({'error': str(e), 'code': 'unknown_feature'}, status=status.HTTP_404_NOT_FOUND)

    return Response(QuotaStatusSerializer(quota).data)


@extend_schema(
    request=None,
    responses={200: QuotaStatusSerializer, 429: QuotaStatusSerializer},
    description="Record one use of a feature. Answers 429 when the plan's limit is reached.",
    tags=['subscriptions'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def consume(request, feature):
    """Consume one unit of a feature's quota."""
    try:
        quota = consume_quota(account=request.user, feature=feature)
    except UnknownFeatureError as e:
        return Response({'error': str(e), 'code': 'unknown_feature'}, status=status.HTTP_404_NOT_FOUND)

    data = QuotaStatusSerializer(quota).data
    if not quota.consumed:
        return Response(data, status=status.HTTP_429_TOO_MANY_REQUESTS)
    return Response(data)
