"""Pydantic schemas for scenario records, channel payloads and attempts."""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["easy", "medium", "hard"]
Label = Literal["phishing", "legitimate"]
ThreatLevel = Literal["low", "medium", "high", "critical"]

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")
LABELS: tuple[str, ...] = ("phishing", "legitimate")
CHANNELS: tuple[str, ...] = ("email", "sms", "website", "social", "voice", "qrcode", "ransomware")


class _Content(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class EmailContent(_Content):
    type: Literal["email"] = "email"
    from_address: str
    to_address: str
    subject: str
    body: str
    has_attachment: bool = False
    attachment_name: str | None = None
    task_action: str | None = None  # label of the legitimate task button


class SmsContent(_Content):
    type: Literal["sms"] = "sms"
    sender: str
    message: str
    task_action: str | None = None


class WebsiteContent(_Content):
    type: Literal["website"] = "website"
    url: str
    website_title: str
    website_content: str
    brand_name: str
    has_login_form: bool = False


class SocialContent(_Content):
    type: Literal["social"] = "social"
    platform: str
    username: str
    display_name: str
    post: str
    verified: bool = False


class VoiceContent(_Content):
    type: Literal["voice"] = "voice"
    caller_number: str
    caller_name: str
    transcript: str


class QrCodeContent(_Content):
    type: Literal["qrcode"] = "qrcode"
    qr_context: str
    qr_destination: str
    location: str


class RansomwareContent(_Content):
    type: Literal["ransomware"] = "ransomware"
    title: str
    message: str
    variant: Literal["ransomware", "tech_support", "fake_alert"] = "ransomware"
    demand_amount: str | None = None
    cryptocurrency: str | None = None
    phone_number: str | None = None
    countdown: int | None = None  # seconds shown on the timer


ScenarioContent = Annotated[
    Union[
        EmailContent,
        SmsContent,
        WebsiteContent,
        SocialContent,
        VoiceContent,
        QrCodeContent,
        RansomwareContent,
    ],
    Field(discriminator="type"),
]


class AnalysisHints(BaseModel):
    model_config = ConfigDict(frozen=True)

    threat_level: ThreatLevel
    attack_vector: str | None = None
    targeted_assets: tuple[str, ...] = ()
    real_world_impact: str | None = None


class ScenarioRecord(BaseModel):
    """One authored scenario. The channel is the content's discriminator."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, max_length=64)
    difficulty: Difficulty
    correct_label: Label
    title: str
    content: ScenarioContent
    explanation: str
    red_flags: tuple[str, ...] = ()
    trust_indicators: tuple[str, ...] = ()
    analysis_hints: AnalysisHints | None = None

    @property
    def type(self) -> str:
        return self.content.type

    @property
    def is_phishing(self) -> bool:
        return self.correct_label == "phishing"


class ScenarioOutSchema(BaseModel):
    """Scenario as served to the presentation layer; ground truth withheld."""

    id: str
    type: str
    difficulty: Difficulty
    title: str
    content: ScenarioContent

    @classmethod
    def from_record(cls, record: ScenarioRecord) -> "ScenarioOutSchema":
        return cls(
            id=record.id,
            type=record.type,
            difficulty=record.difficulty,
            title=record.title,
            content=record.content,
        )


class AttemptSubmitSchema(BaseModel):
    scenario_id: str = Field(min_length=1)
    action: str = Field(min_length=1, max_length=64)
    time_taken_seconds: int = Field(default=0, ge=0)
