"""Request and gateway models for user create/update operations."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

# Largest value the users table stores in its integer columns
INT32_MAX = 2**31 - 1


class UserInput(BaseModel):
    """Untrusted user payload for create and update requests.

    Every field may be missing at this stage; the field rules are applied by
    :func:`user_manager.core.services.user.validation.validate`. JSON types
    are enforced strictly and unknown keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "firstName": "Jay",
                    "lastName": "Vas",
                    "email": "jay@gmail.com",
                    "phone": "+0722134567",
                    "age": 30,
                    "status": "active",
                }
            ]
        },
    )

    first_name: StrictStr | None = Field(
        default=None, description="User first name. Max length 50, min length 2"
    )
    last_name: StrictStr | None = Field(
        default=None, description="User last name. Max length 50, min length 2"
    )
    email: StrictStr | None = Field(default=None, description="User email")
    phone: StrictStr | None = Field(
        default=None, description="User phone in E.164 format. Optional"
    )
    age: StrictInt | None = Field(
        default=None, le=INT32_MAX, description="User age. Optional"
    )
    status: StrictStr | None = Field(
        default=None, description="User status (active or inactive). Optional"
    )


class UserParams(BaseModel):
    """Validated, gateway-ready user parameters.

    Optional fields are ``None`` when absent; they are never empty strings or
    zero.
    """

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    age: int | None = None
    status: str | None = None
