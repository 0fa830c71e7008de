"""
eiffel_broadcaster – signs, validates and delivers Eiffel events over AMQP.

Import path convention::

    from eiffel_broadcaster.app import Broadcaster
    from eiffel_broadcaster.config import BroadcasterSettings, EnvSettingsLoader
    from eiffel_broadcaster.events import Event, EventFactory, LinkType
    from eiffel_broadcaster.signing import UserEventSigner, verify_event
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
