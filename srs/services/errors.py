class CardNotFound(LookupError):
    def __init__(self, card_id):
        super().__init__(f"card {card_id} does not exist")
        self.card_id = card_id
