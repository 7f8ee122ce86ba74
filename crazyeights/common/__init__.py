"""Cards and decks shared by the game modules."""
