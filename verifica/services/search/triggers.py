"""Decides whether submitted content is time-sensitive enough to need a live web search."""

SEARCH_TRIGGERS = (
    # prices and markets
    "dólar", "dolar", "cotação", "preço", "valor", "subiu", "caiu", "aumentou", "diminuiu",
    # recency
    "hoje", "ontem", "esta semana", "atual", "agora", "recente", "último", "nova",
    # economy
    "bolsa", "ibovespa", "ação", "bitcoin", "cripto", "inflação", "pib", "economia",
    # politics
    "eleição", "presidente", "governo", "ministro", "deputado", "senador",
    # health
    "covid", "vacina", "pandemia", "vírus", "saúde", "sus",
    # public life
    "greve", "manifestação", "protesto", "acordo", "decisão", "aprovado",
    # crime and accidents
    "morreu", "morte", "acidente", "crime", "prisão", "condenado",
)


def needs_search(content: str) -> bool:
    """True when ``content`` mentions any trigger term, ignoring case."""
    if not content:
        return False
    lowered = content.lower()
    return any(trigger in lowered for trigger in SEARCH_TRIGGERS)
