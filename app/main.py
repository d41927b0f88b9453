"""
Streamlit Frontend for Anthaathi

The screens a farmer moves through on their phone or laptop:
splash → login → language → home → weather / pest / chat / market /
expenses / profile.

DESIGN PRINCIPLES:
1. Large, simple controls
2. Every label in the farmer's chosen language
3. Blocking, plain-language error messages
4. Sample data is always labelled as such

All state lives in the stores built by the orchestrator; this module
only renders it and forwards user actions.
"""

import asyncio
from datetime import datetime

import streamlit as st

from anthaathi.config import validate_all_settings
from anthaathi.i18n import greeting_key
from anthaathi.market import search_prices
from anthaathi.models.advisory import ChatMessage
from anthaathi.models.expense import ExpenseCategory
from anthaathi.models.profile import Language
from anthaathi.navigation import Screen
from anthaathi.orchestrator import AppComponents, create_app_components
from anthaathi.services.auth import OtpRejectedError
from anthaathi.services.storage import StorageError
from anthaathi.validation import InputValidationError


# Page configuration
st.set_page_config(
    page_title="Anthaathi",
    page_icon="🌾",
    layout="centered",
    initial_sidebar_state="collapsed",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 6px;
    }
    .weather-box {
        padding: 20px;
        background-color: #e8f5e9;
        border-radius: 10px;
        border-left: 5px solid #2e7d32;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #1b5e20;
    }
</style>
""", unsafe_allow_html=True)


LANGUAGE_NAMES = {
    Language.ENGLISH: "English",
    Language.TAMIL: "தமிழ்",
}

FEATURE_TILES = [
    (Screen.WEATHER, "🌤️", "weather"),
    (Screen.PEST, "🐛", "pest_detection"),
    (Screen.CHAT, "💬", "ai_chat"),
    (Screen.MARKET, "📈", "market_prices"),
    (Screen.EXPENSES, "💰", "expenses"),
    (Screen.PROFILE, "👤", "profile"),
]


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> AppComponents:
    """
    Get or create application components (cached).

    One set per server process, shared by every browser tab: the app
    serves a single device and a single farmer.
    """
    return create_app_components()


def t(app: AppComponents, key: str) -> str:
    return app.language.translate(key) or key


def main():
    """Main application entry point."""
    app = get_components()
    screen = app.navigator.current

    if screen == Screen.SPLASH:
        render_splash(app)
    elif screen == Screen.LOGIN:
        render_login(app)
    elif screen == Screen.LANGUAGE:
        render_language(app)
    elif screen == Screen.HOME:
        render_home(app)
    else:
        render_feature(app, screen)


def render_splash(app: AppComponents):
    st.title("🌾 ANTHAATHI")
    st.caption(t(app, "app_tagline"))
    with st.spinner(""):
        run_async(app.start())
    st.rerun()


def render_login(app: AppComponents):
    st.title(f"🌾 {t(app, 'app_name')}")
    st.caption(t(app, "app_tagline"))

    if "otp_phone" not in st.session_state:
        st.session_state.otp_phone = None

    if st.session_state.otp_phone is None:
        phone = st.text_input(
            f"{t(app, 'phone')} (+91)",
            max_chars=10,
            placeholder="9876543210",
        )
        if st.button(t(app, "send_otp"), type="primary"):
            try:
                run_async(app.login_flow.request_otp(phone))
            except InputValidationError as e:
                st.error(str(e))
            else:
                st.session_state.otp_phone = phone.strip()
                st.rerun()
        return

    st.info(f"OTP sent to +91 {st.session_state.otp_phone}")
    code = st.text_input("OTP", max_chars=6, type="password")

    col1, col2 = st.columns(2)
    with col1:
        if st.button(t(app, "verify_otp"), type="primary"):
            try:
                run_async(app.login_flow.verify(st.session_state.otp_phone, code))
            except (InputValidationError, OtpRejectedError) as e:
                st.error(str(e))
            except StorageError as e:
                st.error(f"Could not save your login: {e}")
            else:
                st.session_state.otp_phone = None
                st.rerun()
    with col2:
        if st.button(t(app, "cancel")):
            st.session_state.otp_phone = None
            st.rerun()


def render_language_picker(app: AppComponents, key: str):
    """Language radio; changing it updates the preference and the profile."""
    options = list(Language)
    choice = st.radio(
        t(app, "select_language"),
        options=options,
        index=options.index(app.language.language),
        format_func=lambda lang: LANGUAGE_NAMES[lang],
        horizontal=True,
        key=key,
    )
    if choice != app.language.language:
        try:
            run_async(app.set_language(choice))
        except StorageError as e:
            st.error(f"Could not save language: {e}")
        else:
            st.rerun()


def render_language(app: AppComponents):
    st.title(t(app, "select_language"))
    render_language_picker(app, key="language_screen_picker")

    if st.button(t(app, "continue"), type="primary"):
        app.navigator.language_confirmed()
        st.rerun()


def render_home(app: AppComponents):
    user = app.session.user
    name = (user.display_name if user else None) or t(app, "farmer")

    st.title(f"{t(app, greeting_key(datetime.now().hour))}, {name}")
    if user and user.location:
        st.caption(f"📍 {user.location}")

    columns = st.columns(2)
    for index, (screen, icon, label_key) in enumerate(FEATURE_TILES):
        with columns[index % 2]:
            if st.button(f"{icon} {t(app, label_key)}", key=f"tile_{screen.value}"):
                app.navigator.open(screen)
                st.rerun()


def render_feature(app: AppComponents, screen: Screen):
    if st.button(f"← {t(app, 'home')}"):
        app.navigator.back()
        # weather and diagnosis are per visit
        for key in ("weather", "diagnosis"):
            st.session_state.pop(key, None)
        st.rerun()

    renderers = {
        Screen.WEATHER: render_weather,
        Screen.PEST: render_pest,
        Screen.CHAT: render_chat,
        Screen.MARKET: render_market,
        Screen.EXPENSES: render_expenses,
        Screen.PROFILE: render_profile,
    }
    renderers[screen](app)


def render_weather(app: AppComponents):
    st.title(f"🌤️ {t(app, 'weather')}")

    if st.button("🔄") or "weather" not in st.session_state:
        with st.spinner(""):
            st.session_state.weather = run_async(app.weather.fetch_weather())

    snapshot = st.session_state.weather
    if snapshot.is_fallback:
        st.warning(t(app, "sample_data"))

    st.markdown(f"""
    <div class="weather-box">
        <p>📍 {snapshot.location}</p>
        <p class="big-number">{snapshot.temp}°C</p>
        <p>{snapshot.condition} · {t(app, 'feels_like')} {snapshot.feels_like}°C</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    col1.metric(t(app, "humidity"), f"{snapshot.humidity}%")
    col2.metric(t(app, "wind"), f"{snapshot.wind_speed} km/h")
    col3.metric(t(app, "rain"), f"{snapshot.rain_chance}%")


def render_pest(app: AppComponents):
    st.title(f"🐛 {t(app, 'pest_detection')}")

    tab_camera, tab_gallery = st.tabs([t(app, "take_photo"), t(app, "pick_gallery")])
    with tab_camera:
        photo = st.camera_input(t(app, "take_photo"))
    with tab_gallery:
        upload = st.file_uploader(t(app, "upload_image"), type=["jpg", "jpeg", "png", "webp"])

    image = photo or upload
    if image is None:
        st.session_state.pop("diagnosis", None)
        return

    st.image(image, width=300)
    if "diagnosis" not in st.session_state:
        with st.spinner(t(app, "analyzing")):
            st.session_state.diagnosis = run_async(app.diagnosis.analyze(image.getvalue()))

    result = st.session_state.diagnosis
    st.error(f"**{t(app, 'disease')}:** {result.disease}")
    st.markdown(f"**{t(app, 'cause')}:** {result.cause}")
    st.markdown(f"**{t(app, 'treatment')}:** {result.treatment}")
    st.markdown(f"**{t(app, 'prevention')}:** {result.prevention}")


def render_chat(app: AppComponents):
    st.title(f"💬 {t(app, 'ai_chat')}")

    if "messages" not in st.session_state:
        st.session_state.messages = [app.chat.welcome_message()]

    for message in st.session_state.messages:
        with st.chat_message("user" if message.is_user else "assistant"):
            st.markdown(message.text)

    question = st.chat_input(t(app, "type_message"))
    if question and question.strip():
        st.session_state.messages.append(ChatMessage(text=question.strip(), is_user=True))
        with st.spinner("..."):
            answer = run_async(app.chat.reply(question))
        if answer:
            st.session_state.messages.append(answer)
        st.rerun()


def render_market(app: AppComponents):
    st.title(f"📈 {t(app, 'market_prices')}")

    query = st.text_input(t(app, "search_crop"))
    rows = search_prices(query)
    if not rows:
        st.info(t(app, "no_results"))
        return

    st.caption(t(app, "price_per_quintal"))
    st.dataframe(
        [
            {
                "Crop": row.crop,
                "Market": row.market,
                "Min": row.min_price,
                "Max": row.max_price,
                "Modal": row.modal_price,
            }
            for row in rows
        ],
        hide_index=True,
        use_container_width=True,
    )


def render_expenses(app: AppComponents):
    st.title(f"💰 {t(app, 'expenses')}")

    st.metric(t(app, "total_expenses"), f"₹{app.expenses.total():,.2f}")

    with st.expander(t(app, "add_expense")):
        with st.form("add_expense", clear_on_submit=True):
            title = st.text_input(t(app, "title"))
            amount = st.text_input(t(app, "amount"), placeholder="500")
            category = st.selectbox(
                t(app, "category"),
                options=list(ExpenseCategory),
                format_func=app.language.category_label,
            )
            submitted = st.form_submit_button(t(app, "save"), type="primary")

        if submitted:
            try:
                run_async(app.expenses.add_expense(title, amount, category))
            except InputValidationError as e:
                st.error(str(e))
            except StorageError as e:
                st.error(f"Could not save expense: {e}")
            else:
                st.rerun()

    expenses = app.expenses.expenses
    if not expenses:
        st.info(t(app, "no_expenses"))
        return

    for expense in expenses:
        col1, col2, col3 = st.columns([4, 2, 1])
        col1.markdown(
            f"**{expense.title}**  \n"
            f"{app.language.category_label(expense.category)} · {expense.date.strftime('%d %b %Y')}"
        )
        col2.markdown(f"₹{expense.amount:,.2f}")
        if col3.button("🗑️", key=f"delete_{expense.id}"):
            try:
                run_async(app.expenses.delete_expense(expense.id))
            except StorageError as e:
                st.error(f"Could not delete expense: {e}")
            else:
                st.rerun()


def render_profile(app: AppComponents):
    st.title(f"👤 {t(app, 'profile')}")
    user = app.session.user
    if user is None:
        return

    st.markdown(f"**{t(app, 'phone')}:** +91 {user.phone}")

    with st.form("profile"):
        name = st.text_input(t(app, "name"), value=user.name)
        location = st.text_input(t(app, "location"), value=user.location)
        if st.form_submit_button(t(app, "save"), type="primary"):
            try:
                run_async(app.save_profile(name, location))
            except (StorageError, ValueError) as e:
                st.error(f"Could not save profile: {e}")
            else:
                st.success("✅")

    render_language_picker(app, key="profile_language_picker")

    st.markdown("---")
    if st.button(f"🚪 {t(app, 'logout')}"):
        try:
            run_async(app.logout())
        except StorageError as e:
            st.error(f"Could not log out: {e}")
        else:
            for key in ("weather", "diagnosis", "messages"):
                st.session_state.pop(key, None)
            st.rerun()

    with st.expander("⚙️ Settings"):
        status = validate_all_settings()
        if status.get("weather"):
            st.success("✅ OpenWeatherMap - Connected")
        else:
            st.error(f"❌ OpenWeatherMap - {status.get('weather_error', 'Not configured')}")
        st.markdown(
            "To configure the application, create a `.env` file with your API keys. "
            "See `.env.example` for the required variables."
        )

        events = app.audit_logger.recent_events[:10]
        if events:
            st.markdown("**Recent activity**")
            for event in events:
                st.markdown(f"- {event.timestamp.strftime('%H:%M:%S')} {event.description}")


if __name__ == "__main__":
    main()
