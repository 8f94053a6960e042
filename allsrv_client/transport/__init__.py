"""HTTP transport and JSON:API codec."""

from allsrv_client.transport.codec import Transport, decode_envelope, read_limited

__all__ = ["Transport", "decode_envelope", "read_limited"]
