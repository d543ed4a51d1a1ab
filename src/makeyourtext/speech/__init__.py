from makeyourtext.speech.preprocess import normalize_for_tts
from makeyourtext.speech.ssml import to_ssml
from makeyourtext.speech.voice_profile import VoiceProfile, voice_profile

__all__ = ["VoiceProfile", "normalize_for_tts", "to_ssml", "voice_profile"]
