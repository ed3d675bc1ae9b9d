from lorenzbeat.core.constants import LEAD_VOICES, PAD_VOICES
from lorenzbeat.core.voices import pick_voice, pick_voices


def test_pick_voice_honours_candidate_order():
    assert pick_voice(["tri", "pluck", "sine"], ["sine", "pluck"]) == "pluck"


def test_pick_voice_falls_back_to_sine():
    assert pick_voice(["tri", "pluck"], ["piano"]) == "sine"
    assert pick_voice(["tri"], None) == "sine"
    assert pick_voice(["tri"], []) == "sine"


def test_pick_voices_per_role():
    voices = pick_voices({"lead": LEAD_VOICES, "pad": PAD_VOICES}, ["pulse", "tri"])
    assert voices == {"lead": "tri", "pad": "pulse"}
