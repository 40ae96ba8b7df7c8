from django.urls import path
from .views import ContactsView, ContactRequestsView, SentContactRequestsView, FindUserView

urlpatterns = [
    path('', ContactsView.as_view(), name='contacts'),
    path('requests/', ContactRequestsView.as_view(), name='contact_requests'),
    path('requests/sent/', SentContactRequestsView.as_view(), name='sent_contact_requests'),
    path('search/', FindUserView.as_view(), name='find_user'),
]
