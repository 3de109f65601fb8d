"""Streamlit frontend package."""
