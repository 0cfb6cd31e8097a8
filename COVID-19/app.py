"""Entry point: ``streamlit run COVID-19/app.py``."""

from covid_dashboard.app import main

main()
