from django.urls import path
from .views import (
    CardCreateView,
    IntervalPreviewView,
    ResetProgressView,
    ReviewView,
    SetStatsView,
    StudyQueueView,
)

urlpatterns = [
    path("cards", CardCreateView.as_view(), name="cards"),
    path("reviews", ReviewView.as_view(), name="review"),
    path("sets/<uuid:set_id>/study-queue", StudyQueueView.as_view(), name="study-queue"),
    path("sets/<uuid:set_id>/stats", SetStatsView.as_view(), name="set-stats"),
    path("cards/<uuid:card_id>/intervals", IntervalPreviewView.as_view(), name="card-intervals"),
    path("cards/<uuid:card_id>/reset", ResetProgressView.as_view(), name="card-reset"),
]
