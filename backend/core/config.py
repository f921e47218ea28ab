from dotenv import load_dotenv
import os

load_dotenv()

SHEET_ID = os.getenv("SHEET_ID", "").strip()

CREDENTIALS_FILE = os.getenv("CREDENTIALS", "credentials.json")
TOKEN_FILE = os.getenv("TOKEN_FILE", "token.json")

TEAMS = [t.strip() for t in os.getenv("TEAMS", "DevOps,VSS").split(",") if t.strip()]

CELL_START = os.getenv("CELL_START", "B5")
CELL_STOP = os.getenv("CELL_STOP", "G")

REFRESH_INTERVAL_SECONDS = float(os.getenv("REFRESH_INTERVAL_SECONDS", "3600"))
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
