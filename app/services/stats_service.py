# app/services/stats_service.py
from datetime import datetime, timedelta, timezone

from sqlmodel import Session

from app.repositories.dog_repo import DogRepository
from app.repositories.stats_repo import StatsRepository
from app.schemas.stats import AdminDashboardStats, RecentDog, RecentDogsResponse

RECENT_WINDOW_DAYS = 30
RECENT_DOGS_LIMIT = 10


class StatsService:
    """
    Orchestrates aggregated admin dashboard statistics.
    """

    def __init__(self, repo: StatsRepository, dog_repo: DogRepository):
        self.repo = repo
        self.dog_repo = dog_repo

    def get_admin_dashboard_stats(self, session: Session) -> AdminDashboardStats:
        now = datetime.now(timezone.utc)
        since = now - timedelta(days=RECENT_WINDOW_DAYS)

        return AdminDashboardStats(
            total_certifications=self.repo.count_certifications(session),
            active_dogs=self.repo.count_active(session, now),
            pending_shipments=self.repo.count_pending_shipments(session),
            recent_certifications=self.repo.count_paid_since(session, since),
        )

    def get_recent_dogs(self, session: Session) -> RecentDogsResponse:
        dogs = self.dog_repo.list_recent_paid(session, limit=RECENT_DOGS_LIMIT)
        return RecentDogsResponse(
            dogs=[RecentDog.model_validate(d, from_attributes=True) for d in dogs]
        )
