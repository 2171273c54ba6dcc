from typing import Final

# Subscription plans
PLAN_ALL: Final[str] = "All"
PLAN_RANK: Final[dict[str, int]] = {"Gratis": 1, "Pro": 2, "Business": 3}
PLAN_PRICES: Final[dict[str, int]] = {"Gratis": 0, "Pro": 15, "Business": 40}

# Weather: WMO code groups (wind override is checked first)
WMO_SUNNY: Final[frozenset[int]] = frozenset({0})
WMO_CLOUDY: Final[frozenset[int]] = frozenset({1, 2, 3, 45, 48})
WMO_RAIN: Final[frozenset[int]] = frozenset({51, 53, 55, 56, 57, 61, 63, 65, 66, 67, 80, 81, 82, 95, 96, 99})
WINDY_KMH: Final[int] = 30

FORECAST_DAILY_FIELDS: Final[str] = (
    "weather_code,temperature_2m_max,temperature_2m_min,"
    "wind_speed_10m_max,relative_humidity_2m_mean,precipitation_probability_max"
)
DAY_LABEL_TODAY: Final[str] = "Oggi"
DAY_LABEL_TOMORROW: Final[str] = "Domani"
IT_WEEKDAYS_SHORT: Final[tuple[str, ...]] = ("lun", "mar", "mer", "gio", "ven", "sab", "dom")
IT_MONTHS_SHORT: Final[tuple[str, ...]] = (
    "gen", "feb", "mar", "apr", "mag", "giu", "lug", "ago", "set", "ott", "nov", "dic"
)

# Suggestion engine thresholds
SUGGESTION_HORIZON_DAYS: Final[int] = 3
HEAVY_RAIN_CHANCE: Final[int] = 60
SUNNY_DRY_CHANCE: Final[int] = 20
SUNNY_MIN_DAYS: Final[int] = 2
PLANTING_MIN_TEMP: Final[int] = 10
PLANTING_MAX_RAIN: Final[int] = 40
PLANTING_MIN_DAYS: Final[int] = 2

# Weather alert thresholds (today only)
ALERT_RAIN_CHANCE: Final[int] = 70
ALERT_WIND_KMH: Final[int] = 35

# Units
HARVEST_UNITS: Final[tuple[str, ...]] = ("kg", "g", "pezzi")
DEFAULT_UNIT_LABEL: Final[str] = "unità"
DEFAULT_INCOME_CATEGORY: Final[str] = "Vendita"
DEFAULT_EXPENSE_CATEGORY: Final[str] = "Fornitura"

# Chart windows (months, current month inclusive)
CASHFLOW_CHART_MONTHS: Final[int] = 6
TREND_CHART_MONTHS: Final[int] = 12

# Garden wizard
WIZARD_FIRST_STEP: Final[int] = 1
WIZARD_LAST_STEP: Final[int] = 7
CULTIVATION_TYPES: Final[tuple[str, ...]] = ("Campo Aperto", "Serra", "Aiuole Rialzate", "Vasi")
SUN_EXPOSURES: Final[tuple[str, ...]] = ("Pieno Sole", "Mezz'ombra", "Ombra Piena")

# Marketplace
MARKET_CONDITIONS: Final[tuple[str, ...]] = ("Come Nuovo", "Buono Stato", "Da Revisionare")
DEFAULT_SELLER: Final[str] = "Mario Rossi"

# Uploads
MAX_IMAGE_BYTES: Final[int] = 5 * 1024 * 1024

# Autocomplete
MIN_SEARCH_CHARS: Final[int] = 2

# Fallback images when image generation yields nothing / fails
FALLBACK_IMAGE_URL: Final[str] = "https://loremflickr.com/400/300/vegetable,plant?lock={ts}"
ERROR_IMAGE_URL: Final[str] = "https://loremflickr.com/400/300/vegetable/error?lock={ts}"

# User-facing messages
MSG_WEATHER_UNAVAILABLE: Final[str] = "Impossibile caricare i dati meteo. Per favore, riprova più tardi."
MSG_GEO_DENIED: Final[str] = "Geolocalizzazione non riuscita. Verrà mostrato il meteo per Roma."
MSG_GEO_UNSUPPORTED: Final[str] = "La geolocalizzazione non è supportata. Verrà mostrato il meteo per Roma."
MSG_DIAGNOSIS_FAILED: Final[str] = "Si è verificato un errore durante l'analisi. Per favore, riprova più tardi."
MSG_IMAGE_TOO_LARGE: Final[str] = "L'immagine è troppo grande. Il limite è 5MB."
MSG_LAYOUT_EMPTY: Final[str] = "L'IA non ha fornito una risposta valida. Riprova modificando leggermente i parametri."
MSG_LAYOUT_FAILED: Final[str] = "Si è verificato un errore durante la generazione del suggerimento. Riprova."
MSG_MARKET_IMAGE_EMPTY: Final[str] = "Impossibile generare l'immagine. Riprova."
MSG_MARKET_IMAGE_FAILED: Final[str] = "Si è verificato un errore durante la generazione. Riprova."
MSG_MARKET_NAME_FIRST: Final[str] = "Inserisci un nome per l'articolo prima di generare l'immagine."
MSG_AI_DISABLED: Final[str] = "Servizio IA non configurato: impostare OPENAI_API_KEY."
MSG_INVALID_DATE: Final[str] = "Inserisci una data valida (AAAA-MM-GG)."

# Weather alerts (notification title/body)
ALERT_RAIN_TITLE: Final[str] = "AgroIO - Allerta Pioggia Forte"
ALERT_RAIN_BODY: Final[str] = (
    "Attenzione: prevista alta probabilità di pioggia ({rain_chance}%) oggi. "
    "Considera di proteggere le colture sensibili."
)
ALERT_WIND_TITLE: Final[str] = "AgroIO - Allerta Vento Forte"
ALERT_WIND_BODY: Final[str] = (
    "Attenzione: previsto vento forte ({wind} km/h) oggi. Assicura le strutture e le coperture."
)

# Prompts
VEGETABLE_IMAGE_PROMPT: Final[str] = (
    "Una foto vibrante e di alta qualità di un/una {name} maturo/a su uno sfondo pulito e neutro, "
    "con un'atmosfera rustica e luminosa. Stile fotografico naturale, adatto per una moderna "
    "applicazione agricola. Nessun testo o filigrana."
)

MARKET_IMAGE_PROMPT: Final[str] = (
    "Una foto realistica e di alta qualità di un/una \"{name}\" in un contesto agricolo o su uno "
    "sfondo pulito. Descrizione: {description}. Lo stile deve essere fotografico e naturale, adatto "
    "per un marketplace. Nessun testo o filigrana."
)

CATALOG_IMAGE_PROMPT: Final[str] = (
    "Crea una foto realistica, vibrante e di alta qualità di un/una \"{name}\" maturo/a. Lo sfondo "
    "deve essere pulito e neutro, con un'atmosfera rustica e luminosa. Lo stile deve essere "
    "fotografico e naturale, adatto per una moderna applicazione agricola. Nessun testo o filigrana. "
    "Deve basarsi sulla seguente descrizione: {description}."
)

DIAGNOSIS_PROMPT: Final[str] = (
    """Sei "AgroGardener", un agronomo esperto e assistente AI. Analizza la seguente immagine di una pianta.
Fornisci una diagnosi chiara, concisa e utile, formattata in Markdown.
La tua risposta DEVE includere le seguenti sezioni ESATTE con questi titoli in grassetto:

**Stato di Salute Generale**
(Descrivi la tua valutazione complessiva: sana, stressata, malata, carenza nutrizionale, ecc.)

**Potenziali Problemi Rilevati**
(Elenca in un elenco puntato i problemi specifici che noti, come macchie fogliari, ingiallimento, presenza di insetti, ecc. Se la pianta sembra sana, indicalo chiaramente.)

**Interventi Consigliati**
(Fornisci un elenco puntato di azioni pratiche e chiare che l'agricoltore può intraprendere. Sii specifico. Se la pianta è sana, fornisci consigli di mantenimento.)"""
)

LAYOUT_PROMPT: Final[str] = (
    """Agisci come un esperto di permacultura e progettazione di orti.
Fornisci una descrizione testuale dettagliata per il layout di un orto: dove posizionare ogni pianta per una crescita ottimale, considerando le consociazioni benefiche e quelle da evitare. Struttura la risposta in sezioni chiare e usa elenchi puntati. Tieni conto della filosofia del sistema agricolo scelto.

**Dettagli dell'Orto:**
- **Sistema Agricolo:** {farming_system}
- **Tipo di Coltivazione:** {cultivation_type}
- **Dimensioni:** {width} metri (larghezza) x {length} metri (lunghezza)
- **Esposizione Solare:** {sun_exposure}
- **Piante Selezionate:** {plants}
- **Contesto:** {photo_context}

Fornisci consigli pratici e concisi."""
)

LAYOUT_IMAGE_PROMPT: Final[str] = (
    "Schizzo semplice e chiaro, visto dall'alto, del layout di un orto di {width} x {length} metri "
    "({cultivation_type}, {sun_exposure}) con aree etichettate per: {plants}. Nessuna filigrana."
)

PHOTO_CONTEXT_PROVIDED: Final[str] = "Una foto dell'area è stata fornita."
PHOTO_CONTEXT_MISSING: Final[str] = "Nessuna foto fornita."
