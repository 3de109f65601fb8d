"""
Streamlit Frontend for Kharch Baant

Entry point: `streamlit run app/main.py`

DESIGN PRINCIPLES:
1. The environment is validated and the gate decided once per process
2. No page renders without the identity provider key
3. A crashing page shows a recovery screen, never a stack trace dump
   (details are shown only outside production)
4. Reload discards everything in memory and starts over
"""

import streamlit as st

from app.views import (
    render_configuration_error,
    render_home_page,
    render_recovery_view,
    render_settings_page,
)
from kharch_baant.audit import configure_logging, create_correlation_id
from kharch_baant.config import SettingsLoadError, get_settings
from kharch_baant.orchestrator import (
    BootstrapComponents,
    create_bootstrap_components,
    create_containment,
)
from kharch_baant.services.identity import IdentityProviderInterface


# Page configuration
st.set_page_config(
    page_title="Kharch Baant",
    page_icon="💸",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_components() -> BootstrapComponents:
    """Create the bootstrap components once per process (cached)."""
    settings = get_settings()
    configure_logging(settings.log_level)
    components = create_bootstrap_components(settings=settings)
    components.validator.log_environment_status()
    return components


def reload_app() -> None:
    """Drop all session state and cached resources, as a fresh start would."""
    st.session_state.clear()
    st.cache_resource.clear()
    get_settings.cache_clear()


def render_app(provider: IdentityProviderInterface, components: BootstrapComponents) -> None:
    """The protected application tree."""
    st.sidebar.title("💸 Kharch Baant")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🏠 Home", "⚙️ Settings"],
        index=0,
    )

    if page == "🏠 Home":
        render_home_page(provider)
    elif page == "⚙️ Settings":
        report = components.validator.validate()
        render_settings_page(
            report,
            components.validator.get_user_friendly_summary(report),
        )


def main():
    """Main application entry point."""
    try:
        components = get_components()
    except SettingsLoadError as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()

    if "correlation_id" not in st.session_state:
        st.session_state.correlation_id = create_correlation_id()

    containment = create_containment(
        components,
        state=st.session_state,
        recovery_view=render_recovery_view,
        on_reload=reload_app,
        correlation_id=st.session_state.correlation_id,
        placeholder=st.empty,
    )

    components.gate.mount(
        render_blocked=render_configuration_error,
        render_protected=lambda provider: containment.render(
            lambda: render_app(provider, components)
        ),
        session=st.session_state,
    )


if __name__ == "__main__":
    main()
