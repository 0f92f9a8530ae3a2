"""
Frontends - console and Streamlit entry points for the agent demos.
"""
