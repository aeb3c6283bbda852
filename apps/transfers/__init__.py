"""Transfers app package.

A transfer hands a booking from its owner (the sender) to another user
(the receiver). It needs two approvals, one from the receiver and one
from an administrator; once both are in, the booking changes hands and
the transfer record disappears. A rejection from either approver removes
the transfer and leaves the booking alone.
"""
