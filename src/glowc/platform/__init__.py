"""Platform services shared by every feature slice (logging, filesystem)."""
