"""Bulk roster upload endpoints.

POST /api/upload/<user_type>/ takes a multipart ``file`` (.xlsx or .csv),
runs the import pipeline and answers with per-row results. Errors are
always JSON so the frontend never has to parse an HTML error page.
"""
import logging
import os

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.http import HttpResponse
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .domain_uploads import ImportHistory
from .excel_import.parser import ImportFileError
from .excel_import.pipeline import import_file, store_upload
from .excel_import.roles import get_import_role
from .excel_import.templates import build_template, template_filename
from .permissions import IsAdminOrPrincipal
from .serializers_upload import ImportHistorySerializer

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = ('.xlsx', '.csv')
XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _error(message, http_status, **extra):
    return Response({"success": False, "message": message, **extra}, status=http_status)


class BulkUploadView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrPrincipal]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request, user_type):
        role = get_import_role(user_type)
        if role is None:
            return _error(f"Unknown upload type '{user_type}'", status.HTTP_404_NOT_FOUND)

        upload = request.FILES.get('file')
        if upload is None:
            return _error("Please upload a file", status.HTTP_400_BAD_REQUEST)
        max_bytes = getattr(settings, 'MAX_UPLOAD_BYTES', 20 * 1024 * 1024)
        if upload.size > max_bytes:
            return _error(f"File too large (> {max_bytes // (1024 * 1024)}MB)", status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        ext = os.path.splitext(upload.name)[1].lower()
        if ext not in ALLOWED_EXTENSIONS:
            return _error("Unsupported file type. Use .xlsx or .csv", status.HTTP_415_UNSUPPORTED_MEDIA_TYPE)

        try:
            path = store_upload(upload)
            result, history = import_file(role, path, upload.name, request.user)
        except ImportFileError as exc:
            return _error(str(exc), status.HTTP_400_BAD_REQUEST)
        except (IntegrityError, ValidationError) as exc:
            logger.warning("%s upload rejected: %s", user_type, exc)
            return _error(
                "Duplicate entries found or validation failed. Please check your data.",
                status.HTTP_400_BAD_REQUEST,
            )
        except Exception as exc:
            logger.exception("%s upload failed", user_type)
            return _error("Error processing file", status.HTTP_500_INTERNAL_SERVER_ERROR, error=str(exc))

        return Response({
            "success": True,
            "message": (
                f"Processed {result.total_records} records. "
                f"Success: {result.success_count}, Failed: {result.error_count}"
            ),
            "historyId": history.pk,
            "data": result.as_dict(),
        })


class UploadHistoryView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrPrincipal]

    def get(self, request):
        queryset = ImportHistory.objects.select_related('uploaded_by').order_by('-created_at', '-id')
        user_type = request.query_params.get('userType')
        if user_type:
            queryset = queryset.filter(user_type=user_type)
        data = ImportHistorySerializer(queryset, many=True).data
        return Response({"success": True, "count": len(data), "data": data})


class UploadTemplateView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrPrincipal]

    def get(self, request, user_type):
        role = get_import_role(user_type)
        if role is None:
            return _error(f"Template not available for '{user_type}'", status.HTTP_404_NOT_FOUND)
        content = build_template(role)
        response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
        response['Content-Disposition'] = f'attachment; filename="{template_filename(role)}"'
        return response
