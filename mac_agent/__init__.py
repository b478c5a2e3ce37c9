"""mac-agent desktop shell: runner job client, keychain facade and GUI command surface."""

__version__ = "0.1.0"
