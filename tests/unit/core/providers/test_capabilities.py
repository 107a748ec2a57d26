import pytest

from core.exceptions import ValidationError
from core.providers.capabilities import MediaCapability, parse_capability


@pytest.mark.parametrize(
    "value",
    [MediaCapability.TEXT_TO_AUDIO, "text-to-audio", "TEXT_TO_AUDIO", " Text-To-Audio "],
)
def test_parse_capability_accepts_members_values_and_names(value):
    assert parse_capability(value) is MediaCapability.TEXT_TO_AUDIO


@pytest.mark.parametrize("value", ["", "   ", "text-to-smell"])
def test_parse_capability_rejects_unknown_values(value):
    with pytest.raises(ValidationError) as excinfo:
        parse_capability(value)

    assert excinfo.value.field == "capability"


def test_capability_values_are_plain_strings():
    assert MediaCapability.VIDEO_TO_AUDIO == "video-to-audio"
    assert len(MediaCapability) == 10
