from pydantic import BaseModel, ConfigDict, Field

# Order in which missing fields are reported back to the user.
EMAIL_INTENT_FIELDS = ("email", "password", "to", "subject", "body")


class EmailIntent(BaseModel):
    """Everything needed to send one email through the webmail UI."""

    model_config = ConfigDict(frozen=True)

    email: str = ""
    password: str = Field(default="", repr=False)
    to: str = ""
    subject: str = ""
    body: str = ""

    def missing_fields(self) -> list[str]:
        return [name for name in EMAIL_INTENT_FIELDS if not getattr(self, name)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()
