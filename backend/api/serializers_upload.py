from rest_framework import serializers

from .domain_uploads import ImportHistory


class ImportHistorySerializer(serializers.ModelSerializer):
    uploaded_by_name = serializers.SerializerMethodField()

    class Meta:
        model = ImportHistory
        fields = [
            'id', 'user_type', 'filename', 'original_filename', 'uploaded_by',
            'uploaded_by_name', 'status', 'total_records', 'success_count',
            'error_count', 'errors', 'created_at',
        ]
        read_only_fields = fields

    def get_uploaded_by_name(self, obj):
        if obj.uploaded_by is None:
            return None
        return obj.uploaded_by.get_full_name() or obj.uploaded_by.username
