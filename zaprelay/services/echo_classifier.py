from zaprelay.services.payload_normalizer import normalize_number


def is_echo(from_me: bool, sender_number: str, bot_number: str) -> bool:
    """True when the message was sent by the tenant's own bot.

    Either signal is enough: the gateway's explicit fromMe flag, or the sender
    being the bot number itself.
    """
    if from_me is True:
        return True
    sender = normalize_number(sender_number)
    return bool(sender) and sender == normalize_number(bot_number)
