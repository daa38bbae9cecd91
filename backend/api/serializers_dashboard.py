from rest_framework import serializers

from .domain_school import Meeting, Notice


def _display_name(user):
    if user is None:
        return None
    return user.get_full_name() or user.username


class NoticeSerializer(serializers.ModelSerializer):
    created_by_name = serializers.SerializerMethodField()

    class Meta:
        model = Notice
        fields = ['id', 'title', 'content', 'audience', 'created_by', 'created_by_name', 'created_at']

    def get_created_by_name(self, obj):
        return _display_name(obj.created_by)


class MeetingSerializer(serializers.ModelSerializer):
    organizer_name = serializers.SerializerMethodField()

    class Meta:
        model = Meeting
        fields = ['id', 'title', 'agenda', 'date', 'audience', 'organizer', 'organizer_name']

    def get_organizer_name(self, obj):
        return _display_name(obj.organizer)
