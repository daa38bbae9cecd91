from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views_dashboard import AdminDashboardMetricsView, DashboardMetricsView, TeacherDashboardMetricsView
from .views_fees import FeeViewSet
from .views_people import AdminStaffViewSet, StudentViewSet, SupportStaffViewSet, TeacherViewSet
from .views_upload import BulkUploadView, UploadHistoryView, UploadTemplateView

router = DefaultRouter()
router.register(r'fees', FeeViewSet, basename='fees')
router.register(r'students', StudentViewSet, basename='students')
router.register(r'teachers', TeacherViewSet, basename='teachers')
router.register(r'admin-staff', AdminStaffViewSet, basename='admin-staff')
router.register(r'support-staff', SupportStaffViewSet, basename='support-staff')

urlpatterns = [
    # Authentication
    path("token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    # Bulk uploads
    path("upload/history/", UploadHistoryView.as_view(), name="upload-history"),
    path("upload/templates/<str:user_type>/", UploadTemplateView.as_view(), name="upload-template"),
    path("upload/<str:user_type>/", BulkUploadView.as_view(), name="upload"),

    # Dashboards
    path("dashboard/metrics/", DashboardMetricsView.as_view(), name="dashboard-metrics"),
    path("dashboard/admin-metrics/", AdminDashboardMetricsView.as_view(), name="dashboard-admin-metrics"),
    path("dashboard/teacher-metrics/", TeacherDashboardMetricsView.as_view(), name="dashboard-teacher-metrics"),

    path("", include(router.urls)),
]
