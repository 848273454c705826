"""Pass-the-device fill-in-the-prompt party card game engine."""
