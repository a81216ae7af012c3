"""Ralph - run-until-complete loop harness for the opencode agent."""

__version__ = "0.1.0"
