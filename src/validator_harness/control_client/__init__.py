"""Interface of the control channel used to query or stop a running validator.

The wire protocol lives outside this package; anything that implements
``ControlClient`` can be handed to the supervisor.
"""

from .protocol import ControlClient, ControlClientFactory

__all__ = ["ControlClient", "ControlClientFactory"]
