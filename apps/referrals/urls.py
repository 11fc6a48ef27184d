from django.urls import path
from . import views

app_name = 'referrals'

urlpatterns = [
    # GET    /api/referrals/dashboard/     - Referral + withdrawal history
    # POST   /api/referrals/code/          - Generate referral code
    # GET    /api/referrals/commissions/   - Commissions credited to me
    path('dashboard/', views.dashboard, name='dashboard'),
    path('code/', views.referral_code, name='referral-code'),
    path('commissions/', views.my_commissions, name='my-commissions'),
]
