"""System prompt and message templates for the dealer commentary."""

DEALER_SYSTEM_PROMPT = (
    "You are the Gothahula Dealer. Be charismatic, slightly spicy, and keep it brief."
)

EMPTY_RESPONSE_FALLBACK = "Place your bets, let's see where the luck goes!"
ERROR_FALLBACK = "The cards never lie, but sometimes they surprise!"


def build_commentary_prompt(
    stage: str,
    pot_total: int,
    seat_name: str,
    seat_coins: int,
    is_seen: bool,
    last_action: str | None = None,
) -> str:
    """
    Build the user prompt describing the table moment to comment on.

    Args:
        stage: Current game stage name
        pot_total: Coins in the pot
        seat_name: Name of the seat that just acted
        seat_coins: That seat's wallet
        is_seen: Whether the seat has looked at its cards
        last_action: What the seat just did, e.g. "played blind"

    Returns:
        Formatted prompt string
    """
    hand_status = "They have seen their cards" if is_seen else "They are playing blind"

    return f"""You are a professional, witty, and slightly flamboyant Bollywood-style casino dealer for a Teen Patti game called "Gothahula Teen Patti".
Current Game Stage: {stage}
Total Pot: {pot_total} coins
Player {seat_name} just {last_action or 'is waiting'}.
Player Hand Status: {hand_status}.
Player Wallet: {seat_coins} coins.

Provide a short, 1-2 sentence witty commentary or encouragement in English with a slight Desi flair.
Don't mention technical mechanics unless it's to tease the player about their bet."""
