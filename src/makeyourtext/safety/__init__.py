from makeyourtext.safety.gate import SafetyGate

__all__ = ["SafetyGate"]
