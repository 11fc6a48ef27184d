from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'withdrawals'

router = DefaultRouter()
router.register(r'', views.WithdrawalViewSet, basename='withdrawal')

urlpatterns = [
    # GET    /api/withdrawals/                 - Withdrawal history
    # POST   /api/withdrawals/                 - Request a withdrawal
    # GET    /api/withdrawals/{id}/            - Withdrawal details
    # POST   /api/withdrawals/{id}/process/    - Approve / reject (staff)
    path('', include(router.urls)),
]
