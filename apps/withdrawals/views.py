from rest_framework import viewsets, mixins, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import WithdrawalRequest
from .serializers import (
    WithdrawalRequestSerializer,
    WithdrawalCreateSerializer,
    WithdrawalProcessSerializer,
)
from .services import (
    request_withdrawal,
    process_withdrawal,
    # Exceptions
    BelowMinimumError,
    InvalidDestinationError,
    InvalidDecisionError,
    WithdrawalNotFoundError,
    AlreadyProcessedError,
    InsufficientPermissionsError,
    InsufficientBalanceError,
)


class WithdrawalPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class WithdrawalCreatedSerializer(serializers.Serializer):
    withdrawal_id = serializers.UUIDField()
    status = serializers.CharField()


class ProcessResultSerializer(serializers.Serializer):
    status = serializers.CharField()


class WithdrawalViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Withdrawal requests.

    list: Current user's withdrawals (staff see all, filter with ?status=)
    create: Request a withdrawal
    retrieve: Get a withdrawal
    process: Approve or reject a withdrawal (staff only)
    """

    serializer_class = WithdrawalRequestSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = WithdrawalPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        user = self.request.user
        queryset = WithdrawalRequest.objects.select_related('account', 'processed_by')
        if not user.is_staff:
            queryset = queryset.filter(account=user)

        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    @extend_schema(request=WithdrawalCreateSerializer, responses={201: WithdrawalCreatedSerializer})
    def create(self, request, *args, **kwargs):
        """Request a withdrawal from the wallet."""
        serializer = WithdrawalCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            withdrawal = request_withdrawal(
                account=request.user,
                amount=serializer.validated_data['amount'],
                destination=serializer.validated_data['payout_destination'],
            )
        except BelowMinimumError as e:
            return Response({'error': str(e), 'code': 'below_minimum'}, status=status.HTTP_400_BAD_REQUEST)
        except InvalidDestinationError as e:
            return Response({'error': str(e), 'code': 'invalid_destination'}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {'withdrawal_id': str(withdrawal.pk), 'status': withdrawal.status},
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=WithdrawalProcessSerializer, responses={200: ProcessResultSerializer})
    @action(detail=True, methods=['post'])
    def process(self, request, pk=None):
        """Approve or reject a withdrawal (staff only)."""
        serializer = WithdrawalProcessSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            withdrawal = process_withdrawal(
                withdrawal_id=pk,
                decision=serializer.validated_data['decision'],
                admin=request.user,
                reason=serializer.validated_data.get('reason', ''),
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except WithdrawalNotFoundError as e:
            return Response({'error': str(e), 'code': 'not_found'}, status=status.HTTP_404_NOT_FOUND)
        except InvalidDecisionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except AlreadyProcessedError as e:
            return Response({'error': str(e), 'code': 'already_processed'}, status=status.HTTP_409_CONFLICT)
        except InsufficientBalanceError as e:
            return Response({'error': str(e), 'code': 'insufficient_balance'}, status=status.HTTP_409_CONFLICT)

        return Response({'status': withdrawal.status})
