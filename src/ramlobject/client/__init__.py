"""Request dispatch for ramlobject.

:class:`~ramlobject.interface.RamlObject` builds requests; the objects in
this sub-package send them.

Classes:
    :class:`Transport` -- protocol for anything with ``async send(request)``.
    :class:`Signer` -- protocol for anything with ``sign(request)``.
    :class:`HttpxTransport` -- default transport backed by :class:`httpx.AsyncClient`.

Example::

    from ramlobject.client import HttpxTransport

    api = RamlObject(description, transport=HttpxTransport())
"""

from ramlobject.client.transport import HttpxTransport, Signer, Transport

__all__ = ["HttpxTransport", "Signer", "Transport"]
