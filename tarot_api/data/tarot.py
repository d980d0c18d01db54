# tarot_api/data/tarot.py
import json

ASPECT_FIELDS = ("general", "love", "career", "health")


def load_tarot_data(filepath):
    """
    Load the Major Arcana deck from a JSON file into rows ready for the cards table.
    """
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    cards = []
    for card in data["cards"]:
        cards.append({
            "arcana_id": card["arcana_id"],
            "arcana_type": card.get("arcana_type", "MAJOR"),
            "name": card["name"],
            "name_kr": card["name_kr"],
            "image_url": card.get("image_url"),
            "keywords": card["keywords"],
            "keywords_kr": card["keywords_kr"],
            "upright": {field: card["upright"].get(field) for field in ASPECT_FIELDS},
            "reversed": {field: card["reversed"].get(field) for field in ASPECT_FIELDS},
            "description": card.get("description"),
            "description_kr": card.get("description_kr"),
            "element": card.get("element"),
            "planet": card.get("planet"),
            "numerology": card["numerology"],
            "symbolism": card.get("symbolism", []),
        })
    return cards
