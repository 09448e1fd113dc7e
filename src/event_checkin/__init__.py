"""Event check-in service.

Attendees register and get a QR code plus a short manual code; staff scan either
to toggle IN/OUT at the gate and washroom checkpoints. The package is organized
by feature modules (registrants, checkin, auth, qr) with a thin Flask controller
layer over service/repository layers.
"""

__version__ = "1.0.0"
