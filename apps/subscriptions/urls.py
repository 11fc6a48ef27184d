from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'subscriptions'

router = DefaultRouter()
router.register(r'requests', views.SubscriptionRequestViewSet, basename='request')

urlpatterns = [
    # Upgrade requests
    # GET    /api/subscriptions/requests/                 - Pending requests (staff)
    # POST   /api/subscriptions/requests/                 - Request an upgrade
    # POST   /api/subscriptions/requests/{id}/approve/    - Approve (staff)
    # POST   /api/subscriptions/requests/{id}/reject/     - Reject (staff)

    path('me/', views.my_subscription, name='my-subscription'),
    path('quota/<str:feature>/', views.quota_status, name='quota-status'),
    path('quota/<str:feature>/consume/', views.consume, name='quota-consume'),

    path('', include(router.urls)),
]
