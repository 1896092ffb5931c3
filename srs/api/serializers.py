from rest_framework import serializers

from ..config import SUPPORTED_LANGUAGES

class ReviewInSerializer(serializers.Serializer):
    card_id = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=1, max_value=4)
    idempotency_key = serializers.CharField(max_length=64)

class StudyQueueQuerySerializer(serializers.Serializer):
    new_limit = serializers.IntegerField(min_value=0, required=False)
    review_limit = serializers.IntegerField(min_value=0, required=False)

class IntervalQuerySerializer(serializers.Serializer):
    language = serializers.ChoiceField(choices=SUPPORTED_LANGUAGES, required=False)

class CardOutSerializer(serializers.Serializer):
    id = serializers.CharField()
    set_id = serializers.CharField()
    front = serializers.CharField()
    back = serializers.CharField()
    learning_step = serializers.IntegerField()
    status = serializers.CharField(source="status.value")
    next_review_date = serializers.IntegerField()
    last_review_date = serializers.IntegerField()

class CardInSerializer(serializers.Serializer):
    set_id = serializers.UUIDField()
    front = serializers.CharField(max_length=5000)
    back = serializers.CharField(max_length=5000)
