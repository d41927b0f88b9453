"""
Static display strings for English and Tamil.

Both dictionaries must carry the same keys; tests enforce this.
"""

from types import MappingProxyType
from typing import Mapping

from anthaathi.models.profile import Language


ENGLISH: Mapping[str, str] = MappingProxyType({
    "app_name": "ANTHAATHI",
    "app_tagline": "AI Farming Companion",
    "home": "Home",
    "weather": "Weather",
    "pest_detection": "Pest Detection",
    "ai_chat": "AI Assistant",
    "market_prices": "Market Prices",
    "expenses": "Expenses",
    "profile": "Profile",
    "good_morning": "Good Morning",
    "good_afternoon": "Good Afternoon",
    "good_evening": "Good Evening",
    "farmer": "Farmer",
    "phone": "Phone",
    "send_otp": "Send OTP",
    "verify_otp": "Verify OTP",
    "select_language": "Select Language",
    "continue": "Continue",
    "feels_like": "Feels like",
    "humidity": "Humidity",
    "wind": "Wind",
    "rain": "Rain",
    "sample_data": "Sample data (offline)",
    "upload_image": "Upload Crop Image",
    "take_photo": "Take Photo",
    "pick_gallery": "Pick from Gallery",
    "analyzing": "Analyzing...",
    "disease": "Disease",
    "cause": "Cause",
    "treatment": "Treatment",
    "prevention": "Prevention",
    "type_message": "Type your question...",
    "search_crop": "Search crop or market",
    "price_per_quintal": "Price per quintal (₹)",
    "no_results": "No results found",
    "add_expense": "Add Expense",
    "total_expenses": "Total Expenses",
    "no_expenses": "No expenses yet",
    "title": "Title",
    "amount": "Amount",
    "category": "Category",
    "save": "Save",
    "cancel": "Cancel",
    "name": "Name",
    "location": "Location",
    "language": "Language",
    "logout": "Logout",
    "seeds": "Seeds",
    "fertilizer": "Fertilizer",
    "labour": "Labour",
    "equipment": "Equipment",
    "transport": "Transport",
    "other": "Other",
})

TAMIL: Mapping[str, str] = MappingProxyType({
    "app_name": "ANTHAATHI",
    "app_tagline": "AI விவசாய துணை",
    "home": "முகப்பு",
    "weather": "வானிலை",
    "pest_detection": "பூச்சி கண்டறிதல்",
    "ai_chat": "AI உதவியாளர்",
    "market_prices": "சந்தை விலைகள்",
    "expenses": "செலவுகள்",
    "profile": "சுயவிவரம்",
    "good_morning": "காலை வணக்கம்",
    "good_afternoon": "மதிய வணக்கம்",
    "good_evening": "மாலை வணக்கம்",
    "farmer": "விவசாயி",
    "phone": "தொலைபேசி",
    "send_otp": "OTP அனுப்பு",
    "verify_otp": "OTP சரிபார்",
    "select_language": "மொழி தேர்வு",
    "continue": "தொடரவும்",
    "feels_like": "உணர்வு வெப்பநிலை",
    "humidity": "ஈரப்பதம்",
    "wind": "காற்று",
    "rain": "மழை",
    "sample_data": "மாதிரி தரவு (இணைப்பு இல்லை)",
    "upload_image": "பயிர் படத்தைப் பதிவேற்று",
    "take_photo": "புகைப்படம் எடு",
    "pick_gallery": "கேலரியில் இருந்து தேர்வு",
    "analyzing": "பகுப்பாய்வு செய்கிறது...",
    "disease": "நோய்",
    "cause": "காரணம்",
    "treatment": "சிகிச்சை",
    "prevention": "தடுப்பு",
    "type_message": "உங்கள் கேள்வியை உள்ளிடவும்...",
    "search_crop": "பயிர் அல்லது சந்தையைத் தேடு",
    "price_per_quintal": "குவிண்டாலுக்கு விலை (₹)",
    "no_results": "முடிவுகள் இல்லை",
    "add_expense": "செலவு சேர்",
    "total_expenses": "மொத்த செலவுகள்",
    "no_expenses": "இன்னும் செலவுகள் இல்லை",
    "title": "தலைப்பு",
    "amount": "தொகை",
    "category": "வகை",
    "save": "சேமி",
    "cancel": "ரத்து",
    "name": "பெயர்",
    "location": "இடம்",
    "language": "மொழி",
    "logout": "வெளியேறு",
    "seeds": "விதைகள்",
    "fertilizer": "உரம்",
    "labour": "கூலி",
    "equipment": "உபகரணங்கள்",
    "transport": "போக்குவரத்து",
    "other": "மற்றவை",
})

TRANSLATIONS: Mapping[Language, Mapping[str, str]] = MappingProxyType({
    Language.ENGLISH: ENGLISH,
    Language.TAMIL: TAMIL,
})


def get_dictionary(language: Language) -> Mapping[str, str]:
    """Dictionary for a language; unknown languages get English."""
    return TRANSLATIONS.get(language, ENGLISH)


def greeting_key(hour: int) -> str:
    """Dictionary key of the greeting for an hour of the day (0-23)."""
    if hour < 12:
        return "good_morning"
    if hour < 17:
        return "good_afternoon"
    return "good_evening"
