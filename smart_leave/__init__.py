"""
Smart Leave Management console: REST client, leave rules and Streamlit views.
"""
