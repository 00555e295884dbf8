"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import pytest

from meal_booking.adapters.email_client import EmailClient
from meal_booking.adapters.push_client import PushClient
from meal_booking.config import Settings
from meal_booking.containers import AppContainer, wire_container
from meal_booking.domain.bookings import (
    BookingStatus,
    CutoffConfig,
    MealBooking,
    UserLocation,
)
from meal_booking.domain.models import Role, UserRecord
from meal_booking.domain.notifications import NotificationRecord, NotificationType
from meal_booking.services.bookings import BookingRepository
from meal_booking.services.clock import Clock
from meal_booking.services.cutoff import CutoffConfigRepository
from meal_booking.services.locations import LocationRepository
from meal_booking.services.notifications import NotificationRepository
from meal_booking.services.users import UserRepository

OFFICE_TZ = ZoneInfo("Asia/Kolkata")
OFFICE_LAT = 18.5204
OFFICE_LON = 73.8567
FAR_LAT = 18.6000
FAR_LON = 73.9500


def local(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    """Build an office-local datetime."""
    return datetime(year, month, day, hour, minute, tzinfo=OFFICE_TZ)


@dataclass
class FixedClock(Clock):
    """Clock that only moves when told to."""

    current: datetime

    def now(self) -> datetime:
        return self.current

    def set(self, value: datetime) -> None:
        self.current = value

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    touched: list[UUID] = field(default_factory=list)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, email: str, name: str, role: Role) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            email=email,
            name=name,
            role=role,
            created_at=datetime.now(tz=UTC),
        )
        self.users[user.id] = user
        return user

    def touch_last_login(self, user_id: UUID) -> None:
        self.touched.append(user_id)

    def list_by_role(self, role: Role) -> list[UserRecord]:
        return [user for user in self.users.values() if user.role == role]


@dataclass
class InMemoryBookingRepository(BookingRepository):
    """In-memory booking repository enforcing one row per user and date."""

    bookings: dict[UUID, MealBooking] = field(default_factory=dict)

    def get_booking(self, user_id: UUID, booking_date: date) -> MealBooking | None:
        for booking in self.bookings.values():
            if booking.user_id == user_id and booking.booking_date == booking_date:
                return booking
        return None

    def exists_for_user_on(self, user_id: UUID, booking_date: date) -> bool:
        return self.get_booking(user_id, booking_date) is not None

    def exists_for_user_between(self, user_id: UUID, start: date, end: date) -> bool:
        return any(
            booking.user_id == user_id and start <= booking.booking_date <= end
            for booking in self.bookings.values()
        )

    def create_booking(
        self,
        user_id: UUID,
        booking_date: date,
        booked_at: datetime,
        status: BookingStatus,
    ) -> MealBooking:
        if self.get_booking(user_id, booking_date) is not None:
            raise RuntimeError("duplicate key value violates unique constraint")
        booking = MealBooking(
            id=uuid4(),
            user_id=user_id,
            booking_date=booking_date,
            booked_at=booked_at,
            status=status,
        )
        self.bookings[booking.id] = booking
        return booking

    def transition_status(
        self,
        booking_id: UUID,
        expected: BookingStatus,
        status: BookingStatus,
        booked_at: datetime | None = None,
    ) -> bool:
        current = self.bookings.get(booking_id)
        if current is None or current.status != expected:
            return False
        self.bookings[booking_id] = MealBooking(
            id=current.id,
            user_id=current.user_id,
            booking_date=current.booking_date,
            booked_at=booked_at or current.booked_at,
            status=status,
            available_for_lunch=(
                False if booked_at is not None else current.available_for_lunch
            ),
        )
        return True

    def set_available_for_lunch(self, booking_id: UUID, available: bool) -> None:
        current = self.bookings[booking_id]
        self.bookings[booking_id] = MealBooking(
            id=current.id,
            user_id=current.user_id,
            booking_date=current.booking_date,
            booked_at=current.booked_at,
            status=current.status,
            available_for_lunch=available,
        )

    def list_by_date_and_status(
        self, booking_date: date, status: BookingStatus
    ) -> list[MealBooking]:
        return [
            booking
            for booking in self.bookings.values()
            if booking.booking_date == booking_date and booking.status == status
        ]

    def list_for_user_from(self, user_id: UUID, start: date) -> list[MealBooking]:
        return sorted(
            (
                booking
                for booking in self.bookings.values()
                if booking.user_id == user_id and booking.booking_date >= start
            ),
            key=lambda booking: booking.booking_date,
        )

    def for_user(self, user_id: UUID) -> list[MealBooking]:
        return self.list_for_user_from(user_id, date.min)


@dataclass
class InMemoryCutoffConfigRepository(CutoffConfigRepository):
    """In-memory cutoff rows; the last one wins."""

    rows: list[CutoffConfig] = field(default_factory=list)

    def get_latest(self) -> CutoffConfig | None:
        return self.rows[-1] if self.rows else None

    def create(self, cutoff_time: time) -> CutoffConfig:
        config = CutoffConfig(id=len(self.rows) + 1, cutoff_time=cutoff_time)
        self.rows.append(config)
        return config


@dataclass
class InMemoryLocationRepository(LocationRepository):
    """In-memory latest-location store."""

    locations: dict[UUID, UserLocation] = field(default_factory=dict)

    def get_latest(self, user_id: UUID) -> UserLocation | None:
        return self.locations.get(user_id)

    def upsert(
        self, user_id: UUID, latitude: float, longitude: float, updated_at: datetime
    ) -> UserLocation:
        location = UserLocation(
            user_id=user_id,
            latitude=latitude,
            longitude=longitude,
            updated_at=updated_at,
        )
        self.locations[user_id] = location
        return location


@dataclass
class InMemoryNotificationRepository(NotificationRepository):
    """In-memory notification store."""

    notifications: dict[UUID, NotificationRecord] = field(default_factory=dict)

    def create_notification(  # noqa: PLR0913
        self,
        user_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        scheduled_at: datetime,
    ) -> NotificationRecord:
        record = NotificationRecord(
            id=uuid4(),
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            scheduled_at=scheduled_at,
        )
        self.notifications[record.id] = record
        return record

    def get_notification(self, notification_id: UUID) -> NotificationRecord | None:
        return self.notifications.get(notification_id)

    def exists_for_user_type_between(
        self,
        user_id: UUID,
        notification_type: NotificationType,
        start: datetime,
        end: datetime,
    ) -> bool:
        return any(
            record.user_id == user_id
            and record.type == notification_type
            and start <= record.scheduled_at <= end
            for record in self.notifications.values()
        )

    def list_unsent_due(self, now: datetime) -> list[NotificationRecord]:
        return sorted(
            (
                record
                for record in self.notifications.values()
                if not record.sent and record.scheduled_at <= now
            ),
            key=lambda record: record.scheduled_at,
        )

    def mark_sent(self, notification_id: UUID, sent_at: datetime) -> bool:
        record = self.notifications[notification_id]
        if record.sent:
            return False
        self.notifications[notification_id] = NotificationRecord(
            id=record.id,
            user_id=record.user_id,
            type=record.type,
            title=record.title,
            message=record.message,
            scheduled_at=record.scheduled_at,
            sent=True,
            sent_at=sent_at,
        )
        return True

    def of_type(self, notification_type: NotificationType) -> list[NotificationRecord]:
        return [
            record
            for record in self.notifications.values()
            if record.type == notification_type
        ]


@dataclass
class FakePushClient(PushClient):
    """Fake push client that records messages and can be told to fail."""

    messages: list[tuple[UUID, str, str]] = field(default_factory=list)
    fail: bool = False

    async def send_push(
        self,
        user_id: UUID,
        title: str,
        body: str,
        data: dict[str, str] | None = None,
    ) -> None:
        if self.fail:
            raise RuntimeError("push gateway unavailable")
        self.messages.append((user_id, title, body))


@dataclass
class FakeEmailClient(EmailClient):
    """Fake email client that records messages."""

    messages: list[dict[str, object]] = field(default_factory=list)
    fail: bool = False

    async def send_email(
        self, to: str, subject: str, text: str, html: str | None = None
    ) -> None:
        if self.fail:
            raise RuntimeError("email provider unavailable")
        self.messages.append({"to": to, "subject": subject, "text": text, "html": html})


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        push_gateway_url="https://push.example.com",
        push_api_key="push-key",
        email_api_url="https://mail.example.com/v1/messages",
        email_api_key="mail-key",
        hr_email="hr@example.com",
        office_latitude=OFFICE_LAT,
        office_longitude=OFFICE_LON,
        office_radius_meters=500.0,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(local(2026, 1, 18, 12, 0))


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def booking_repository() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


@pytest.fixture
def cutoff_repository() -> InMemoryCutoffConfigRepository:
    repository = InMemoryCutoffConfigRepository()
    repository.create(time(22, 0))
    return repository


@pytest.fixture
def location_repository() -> InMemoryLocationRepository:
    return InMemoryLocationRepository()


@pytest.fixture
def notification_repository() -> InMemoryNotificationRepository:
    return InMemoryNotificationRepository()


@pytest.fixture
def push_client() -> FakePushClient:
    return FakePushClient()


@pytest.fixture
def email_client() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FixedClock,
    user_repository: InMemoryUserRepository,
    booking_repository: InMemoryBookingRepository,
    cutoff_repository: InMemoryCutoffConfigRepository,
    location_repository: InMemoryLocationRepository,
    notification_repository: InMemoryNotificationRepository,
    push_client: FakePushClient,
    email_client: FakeEmailClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return wire_container(
        settings=settings,
        clock=clock,
        user_repository=user_repository,
        booking_repository=booking_repository,
        cutoff_repository=cutoff_repository,
        location_repository=location_repository,
        notification_repository=notification_repository,
        push_client=push_client,
        email_client=email_client,
        close_resources=close_resources,
    )


@pytest.fixture
def employee(user_repository: InMemoryUserRepository) -> UserRecord:
    return user_repository.create_user("asha@example.com", "Asha", Role.USER)
