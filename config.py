import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./physio_billing.db")
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Invoice rendering
    CURRENCY_SYMBOL = data.get("CURRENCY_SYMBOL", "₹")
    INVOICE_OUTPUT_DIR = data.get("INVOICE_OUTPUT_DIR", os.path.join(ROOT_PATH, "invoices"))
    PDF_FONT_PATH = data.get("PDF_FONT_PATH", None)  # TTF with the currency glyph

    # Clinic letterhead
    CLINIC_NAME = data.get("CLINIC_NAME", "Physiotherapy Clinic")
    CLINIC_ADDRESS = data.get("CLINIC_ADDRESS", "123 Health Street, Medical District, City - 123456")
    CLINIC_PHONE = data.get("CLINIC_PHONE", "+91 98765 43210")
    CLINIC_EMAIL = data.get("CLINIC_EMAIL", "info@physioclinic.com")
    CLINIC_CONSULTANT = data.get("CLINIC_CONSULTANT", None)
    CLINIC_DEPARTMENT = data.get("CLINIC_DEPARTMENT", None)
    CLINIC_LOGO_PATH = data.get("CLINIC_LOGO_PATH", None)
