from django.urls import path

from .views import ChangePasswordView, LoginView, ProfileView, UserCollectionView, UserDetailView

urlpatterns = [
    path('', UserCollectionView.as_view(), name='user-list'),
    path('login/', LoginView.as_view(), name='login'),
    path('profile/', ProfileView.as_view(), name='profile'),
    path('change-password/', ChangePasswordView.as_view(), name='change-password'),
    path('<uuid:pk>/', UserDetailView.as_view(), name='user-detail'),
]
