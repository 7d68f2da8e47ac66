import re

import phonenumbers
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Count, F, Q, QuerySet
from django.utils import timezone
from django.utils.html import strip_tags
from phonenumbers import NumberParseException

# The party table holds exactly one row with this primary key
PARTY_ID = 1


def validate_phone_number(phone_number: str) -> None:
    """
    Validate an assistant phone number using the phonenumbers library.

    Numbers without a country code are parsed against the
    PHONE_DEFAULT_REGION setting. Only the number's shape is checked
    (possible length for the region), not carrier assignment.

    Args:
        phone_number: The phone number string to validate

    Raises:
        ValidationError: If the phone number cannot be parsed or is impossible
    """
    if not phone_number.strip():
        return  # Allow empty phone numbers

    region = getattr(settings, "PHONE_DEFAULT_REGION", "IQ")
    try:
        parsed_number = phonenumbers.parse(phone_number, region)
    except NumberParseException as e:
        error_messages = {
            NumberParseException.INVALID_COUNTRY_CODE: "Invalid country code.",
            NumberParseException.NOT_A_NUMBER: "This is not a valid phone number.",
            NumberParseException.TOO_SHORT_NSN: "Phone number is too short.",
            NumberParseException.TOO_SHORT_AFTER_IDD: (
                "Phone number is too short after country code."
            ),
            NumberParseException.TOO_LONG: "Phone number is too long.",
        }
        message = error_messages.get(e.error_type, "Invalid phone number format.")
        raise ValidationError(f"'{phone_number}' - {message}") from e

    if not phonenumbers.is_possible_number(parsed_number):
        raise ValidationError(f"'{phone_number}' is not a possible phone number.")


def sanitize_text_field(value: str) -> str:
    """
    Sanitize text input to prevent XSS and other injection attacks.

    Args:
        value: The text value to sanitize

    Returns:
        Sanitized text with HTML tags removed and control characters dropped
    """
    if not value:
        return value

    # Remove script tags and their content completely
    value = re.sub(
        r"<script[^>]*>.*?</script>", "", value, flags=re.IGNORECASE | re.DOTALL
    )

    # Strip remaining HTML tags
    value = strip_tags(value)

    # Remove null bytes and other control characters
    value = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", value)

    # Limit length to prevent DoS attacks
    if len(value) > 10000:
        value = value[:10000]

    return value.strip()


class PartyManager(models.Manager):
    """Manager for the singleton party row."""

    def load(self) -> "Party":
        """Return the party row, creating it with the default threshold."""
        party, _ = self.get_or_create(
            pk=PARTY_ID,
            defaults={"threshold": settings.PARTY_DEFAULT_THRESHOLD},
        )
        return party


class DistrictManager(models.Manager):
    """Custom manager for District with the grouping queries used by reports."""

    def with_governorate(self) -> QuerySet:
        """Return districts annotated with their governorate name (None if dangling)."""
        return self.annotate(governorate_name=F("governorate__name")).order_by("id")

    def with_supporters(self, candidate_id: int | None = None) -> QuerySet:
        """
        Return every district annotated with its supporter count.

        Args:
            candidate_id: Restrict the count to voters of one candidate

        Returns:
            QuerySet ordered by supporters desc, official voters desc, id asc
        """
        voter_filter = None
        if candidate_id is not None:
            voter_filter = Q(voters__candidate_id=candidate_id)
        return self.annotate(
            supporters=Count("voters", filter=voter_filter)
        ).order_by("-supporters", "-official_voters", "id")


class CandidateManager(models.Manager):
    """Custom manager for Candidate with progress annotations."""

    def with_district_name(self) -> QuerySet:
        """Return candidates annotated with their district name (None if dangling)."""
        return self.annotate(district_name=F("district__name"))

    def with_progress(self) -> QuerySet:
        """
        Return candidates annotated with district name and supporter count.

        Ordered by supporters desc, ties broken by id asc so the dashboard
        order is stable between requests.
        """
        return (
            self.with_district_name()
            .annotate(supporters=Count("voters"))
            .order_by("-supporters", "id")
        )


class VoterManager(models.Manager):
    """Custom manager for Voter with lookups used by ingestion and review."""

    def with_card(self, electoral_card: str) -> QuerySet:
        """Return voters holding the given electoral card."""
        return self.filter(electoral_card=electoral_card)

    def for_candidate(self, candidate_id: int) -> QuerySet:
        """Return voters collected for one candidate."""
        return self.filter(candidate_id=candidate_id)

    def recent(self) -> QuerySet:
        """Return voters newest first."""
        return self.order_by("-created_at", "-id")

    def search(self, search_term: str) -> QuerySet:
        """Search voters by name or electoral card substring."""
        queryset = self.all()
        search_term = (search_term or "").strip()
        if search_term:
            queryset = queryset.filter(
                Q(full_name__icontains=search_term)
                | Q(electoral_card__icontains=search_term)
            )
        return queryset

    def reviewable(self) -> QuerySet:
        """Return voters that can take part in (name, dob) duplicate review."""
        return self.exclude(full_name="").exclude(dob__isnull=True)


class Party(models.Model):
    """Party-wide campaign settings. Exactly one row exists, with id 1."""

    id = models.PositiveSmallIntegerField(
        primary_key=True, default=PARTY_ID, editable=False
    )
    name = models.CharField(max_length=200, blank=True, default="")
    threshold = models.PositiveIntegerField(
        default=0, help_text="Party-wide supporter goal"
    )
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PartyManager()

    class Meta:
        db_table = "party"
        verbose_name = "Party"
        verbose_name_plural = "Party"
        constraints = [
            models.CheckConstraint(condition=Q(id=PARTY_ID), name="party_singleton"),
        ]

    def __str__(self) -> str:
        return self.name or "Party"

    def clean(self) -> None:
        """Validate the campaign window."""
        super().clean()
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError(
                {"end_date": "Campaign end date cannot be before its start date."}
            )

    def save(self, *args, **kwargs) -> None:
        self.pk = PARTY_ID
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("The party record cannot be deleted.")

    @classmethod
    def load(cls) -> "Party":
        return cls.objects.load()


class Governorate(models.Model):
    """Top-level geographic grouping of districts."""

    name = models.CharField(max_length=200)

    class Meta:
        db_table = "governorates"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class District(models.Model):
    """Electoral district with its official (eligible) voter count."""

    name = models.CharField(max_length=200)
    official_voters = models.PositiveIntegerField(
        default=0, help_text="Eligible voters registered in the district"
    )
    # Plain reference column: deleting a governorate leaves the id dangling
    governorate = models.ForeignKey(
        Governorate,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="districts",
    )

    objects = DistrictManager()

    class Meta:
        db_table = "districts"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class Candidate(models.Model):
    """Candidate running under the party, with a supporter target."""

    name = models.CharField(max_length=200)
    target = models.PositiveIntegerField(default=0, help_text="Supporter goal")
    district = models.ForeignKey(
        District,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="candidates",
    )

    objects = CandidateManager()

    class Meta:
        db_table = "candidates"
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class Assistant(models.Model):
    """Field canvasser collecting voters on a candidate's behalf."""

    candidate = models.ForeignKey(
        Candidate,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="assistants",
    )
    name = models.CharField(max_length=200)
    phone = models.CharField(
        max_length=32, blank=True, default="", validators=[validate_phone_number]
    )
    area_tags = models.CharField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "assistants"
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return self.name


class Voter(models.Model):
    """A supporter collected for a candidate, directly or through an assistant."""

    candidate = models.ForeignKey(
        Candidate,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="voters",
    )
    # Null means the voter was collected directly, not via an assistant link
    assistant = models.ForeignKey(
        Assistant,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="voters",
    )
    full_name = models.CharField(max_length=255)
    dob = models.DateField(null=True, blank=True)
    district = models.ForeignKey(
        District,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="voters",
    )
    polling_center = models.CharField(max_length=255, blank=True, default="")
    electoral_card = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    objects = VoterManager()

    class Meta:
        db_table = "voters"
        indexes = [
            models.Index(fields=["electoral_card"], name="idx_voters_card"),
            models.Index(fields=["full_name", "dob"], name="idx_voters_name_dob"),
            models.Index(fields=["created_at"], name="idx_voters_created"),
            models.Index(
                fields=["candidate", "created_at"],
                name="idx_voters_candidate_created",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["electoral_card"],
                condition=Q(electoral_card__isnull=False) & ~Q(electoral_card=""),
                name="uniq_voters_electoral_card",
            ),
        ]

    def __str__(self) -> str:
        return self.full_name

    def save(self, *args, **kwargs) -> None:
        # Blank cards are stored as NULL so they never collide
        if not self.electoral_card:
            self.electoral_card = None
        super().save(*args, **kwargs)
