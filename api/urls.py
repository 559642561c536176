# api/urls.py - COMPLETE URL CONFIGURATION

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from accounts import views as account_views
from donations.views import DonationRequestViewSet
from donorhub import views as site_views
from donors import views as donor_views
from fundings import views as funding_views

from . import views

# Create router and register viewsets
router = SimpleRouter(trailing_slash=False)
router.register(r'donation-requests', DonationRequestViewSet, basename='donation-request')

app_name = 'api'

users_urlpatterns = [
    # Public
    path('search', donor_views.search_donors, name='search'),
    path('bangladesh/districts', site_views.districts, name='districts'),
    path('bangladesh/upazilas/<str:district>', site_views.upazilas, name='upazilas'),

    # Authenticated
    path('profile', account_views.profile, name='profile'),
    path('dashboard/stats', views.dashboard_stats, name='dashboard-stats'),

    # Admin only
    path('all', account_views.all_users, name='all'),
    path('<int:user_id>/status', account_views.update_user_status, name='status'),
    path('<int:user_id>/role', account_views.update_user_role, name='role'),
]

urlpatterns = [
    path('auth/', include('accounts.urls')),
    path('users/', include((users_urlpatterns, 'users'))),
    path('fundings/', include('fundings.urls')),
    path('fundings', funding_views.all_fundings, name='fundings-list'),

    # Router URLs
    path('', include(router.urls)),
]

# Available endpoints:
# POST /api/auth/register                         - Create donor account
# POST /api/auth/login                            - Email + password login
# GET  /api/auth/me                               - Current user
# POST /api/auth/token/refresh                    - Refresh JWT
#
# GET  /api/users/search                          - Donor search (with fallback)
# GET  /api/users/bangladesh/districts            - District list
# GET  /api/users/bangladesh/upazilas/{district}  - Upazilas of a district
# GET  /api/users/profile | PUT                   - Own profile
# GET  /api/users/dashboard/stats                 - Dashboard statistics
# GET  /api/users/all                             - All users (admin)
# PUT  /api/users/{id}/status                     - Block / unblock (admin)
# PUT  /api/users/{id}/role                       - Change role (admin)
#
# /api/donation-requests...                       - see donations/views.py
#
# POST /api/fundings/create-payment-intent        - Open gateway intent
# POST /api/fundings/confirm-payment              - Record succeeded payment
# GET  /api/fundings                              - All completed fundings
# GET  /api/fundings/my-fundings                  - Caller's fundings
# GET  /api/fundings/stats                        - Totals (admin, volunteer)
