from elementzones.instrument.instrumenter import ElementInstrumenter

__all__ = ["ElementInstrumenter"]
