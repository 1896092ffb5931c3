from rest_framework import views, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
import structlog
import uuid
from ..domain.enums import RATING_LABELS, Rating
from ..services.errors import CardNotFound
from ..services.reviews import record_review
from ..services.study import (
    add_card,
    interval_preview,
    reset_progress,
    set_stats,
    study_queue_for_set,
)
from ..utils.time import to_utc_iso
from .serializers import (
    CardInSerializer,
    CardOutSerializer,
    IntervalQuerySerializer,
    ReviewInSerializer,
    StudyQueueQuerySerializer,
)

base_logger = structlog.get_logger()


class CardCreateView(views.APIView):
    def post(self, request):
        s = CardInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        card = add_card(
            s.validated_data["set_id"],
            s.validated_data["front"],
            s.validated_data["back"],
        )
        return Response(CardOutSerializer(card).data, status=status.HTTP_201_CREATED)


class ReviewView(views.APIView):
    def post(self, request):
        # Create a unique request_id
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        card_id = s.validated_data["card_id"]
        rating = s.validated_data["rating"]
        idem = s.validated_data["idempotency_key"]

        try:
            log, was_idem = record_review(card_id, rating, idem)
        except CardNotFound as e:
            raise NotFound(str(e))
        status_code = status.HTTP_200_OK if was_idem else status.HTTP_201_CREATED

        logger.info(
            "review_api_response",
            card_id=str(card_id),
            rating=rating,
            idempotent=was_idem,
            new_learning_step=log.new_learning_step,
            next_review_date=log.next_review_date,
            status=status_code,
        )

        return Response(
            {
                "card_id": str(card_id),
                "next_review_date": log.next_review_date,
                "next_review_utc": to_utc_iso(log.next_review_date),
                "new_status": log.new_status,
                "new_learning_step": log.new_learning_step,
                "rating_label": RATING_LABELS[Rating(log.rating)],
                "idempotent": was_idem,
            },
            status=status_code,
        )


class StudyQueueView(views.APIView):
    def get(self, request, set_id):
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        qs = StudyQueueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)

        queue = study_queue_for_set(
            set_id,
            new_limit=qs.validated_data.get("new_limit"),
            review_limit=qs.validated_data.get("review_limit"),
        )

        logger.info("study_queue_api_response", set_id=str(set_id), card_count=len(queue))

        return Response(
            {
                "set_id": str(set_id),
                "cards": CardOutSerializer(queue, many=True).data,
            }
        )


class SetStatsView(views.APIView):
    def get(self, request, set_id):
        stats = set_stats(set_id)
        return Response({"set_id": str(set_id), **stats.to_dict()})


class IntervalPreviewView(views.APIView):
    def get(self, request, card_id):
        qs = IntervalQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)

        try:
            labels = interval_preview(card_id, language=qs.validated_data.get("language"))
        except CardNotFound as e:
            raise NotFound(str(e))

        return Response(
            {
                "card_id": str(card_id),
                "intervals": {str(int(rating)): label for rating, label in labels.items()},
            }
        )


class ResetProgressView(views.APIView):
    def post(self, request, card_id):
        request_id = str(uuid.uuid4())
        logger = base_logger.bind(request_id=request_id)

        try:
            card = reset_progress(card_id)
        except CardNotFound as e:
            raise NotFound(str(e))

        logger.info("reset_progress_api_response", card_id=str(card_id))
        return Response(CardOutSerializer(card).data)
