import os


class Config:
    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Server
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "8000"))

    # Word bank (empty -> built-in catalogue)
    WORD_BANK_PATH = os.environ.get("WORD_BANK_PATH", "")

    # Room codes
    CODE_ATTEMPTS = int(os.environ.get("CODE_ATTEMPTS", "10"))

    # Phase deadlines, enforced by callers through GameEngine.tick
    LOBBY_SECONDS = int(os.environ.get("LOBBY_SECONDS", "60"))
    SELECTING_SECONDS = int(os.environ.get("SELECTING_SECONDS", "30"))
    VOTING_SECONDS = int(os.environ.get("VOTING_SECONDS", "30"))

    # Input limits
    NAME_MAX_LEN = 24
    CLUE_MAX_LEN = 40
