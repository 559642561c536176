from django.urls import path

from . import views

app_name = 'fundings'

urlpatterns = [
    path('create-payment-intent', views.create_payment_intent, name='create_payment_intent'),
    path('confirm-payment', views.confirm_payment, name='confirm_payment'),
    path('my-fundings', views.my_fundings, name='my_fundings'),
    path('stats', views.funding_stats, name='stats'),
]
