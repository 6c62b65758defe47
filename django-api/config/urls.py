from django.contrib import admin
from django.urls import include, path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from enrollments.urls import admin_urlpatterns, public_urlpatterns

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("api/auth/token", TokenObtainPairView.as_view(), name="token-obtain"),
    path("api/auth/token/refresh", TokenRefreshView.as_view(), name="token-refresh"),
    path("api/admin/", include(admin_urlpatterns)),
    path("api/", include(public_urlpatterns)),
]
