"""
Streamlit views for the bootstrap screens.

Three screens decide what a user sees:
1. Configuration error - the identity provider key is missing
2. Recovery - a page crashed while rendering
3. The app itself (home and settings pages)
"""

import streamlit as st

from kharch_baant.bootstrap import RecoveryContext
from kharch_baant.models.config import ValidationReport
from kharch_baant.services.identity import IdentityProviderInterface


def render_configuration_error(missing_key: str) -> None:
    """Static blocking view. No buttons, no network calls."""
    st.title("⚙️ Configuration Required")
    st.error(f"Missing configuration: {missing_key}")
    st.markdown(
        "The app cannot start without its identity provider key. "
        "Add the key below to your `.env` file (or the server environment) "
        "and restart the app."
    )
    st.code(f"{missing_key}=pk_...", language="bash")
    st.caption("See `.env.example` for every variable the app reads.")


def render_recovery_view(context: RecoveryContext) -> None:
    """Default recovery view for a failed containment boundary."""
    st.title("⚠️ Something went wrong")
    st.markdown(
        "We're sorry, but something unexpected happened. "
        "Try again, or reload the app if the problem keeps coming back."
    )

    col1, col2 = st.columns(2)
    with col1:
        st.button(
            "🔁 Try Again",
            key=f"{context.boundary}_retry",
            type="primary",
            on_click=context.retry,
        )
    with col2:
        st.button(
            "🔄 Reload App",
            key=f"{context.boundary}_reload",
            on_click=context.reload,
        )

    if context.details:
        with st.expander("Error Details (Dev Mode)"):
            st.code(context.details, language="text")


def render_home_page(provider: IdentityProviderInterface) -> None:
    """Render the signed-in landing page."""
    st.title("💸 Kharch Baant")

    user = provider.current_user()
    if user is None:
        st.info("You are not signed in.")
        st.markdown(
            f"[Sign in]({provider.config.sign_in_url}) · "
            f"[Create an account]({provider.config.sign_up_url})"
        )
        return

    st.success(f"Signed in as {user.display_name or user.email or user.user_id}")
    st.markdown("Pick a group from the sidebar to see balances and expenses.")


def render_settings_page(report: ValidationReport, summary: str) -> None:
    """Render the configuration status page."""
    st.title("⚙️ Settings")
    st.markdown("### Configuration Status")

    if report.is_valid:
        st.success("✅ All required configuration is set")
    else:
        for entry in report.missing:
            st.error(f"❌ {entry}")

    for warning in report.warnings:
        st.warning(f"⚠️ {warning}")

    with st.expander("📋 Full report"):
        st.text(summary)

    st.markdown("---")
    st.markdown(
        "To configure the application, create a `.env` file with your keys. "
        "See `.env.example` for the required variables."
    )
