# Make `from chatrelay.models import Participant, Message` work
from .orm import Participant, Message  # re-export
