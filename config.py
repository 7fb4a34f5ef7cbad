import os
from dotenv import load_dotenv

# Make sure you have a .env file with YELP_API_KEY="your_key_here"
load_dotenv()

YELP_API_KEY = os.getenv("YELP_API_KEY", "")
YELP_API_URL = os.getenv("YELP_API_URL", "https://api.yelp.com/v3")

# Auth backend (login / signup / current user)
API_URL = os.getenv("API_URL", "http://localhost:3000/api")

# Durable storage for the bearer token
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./secure_store.db")
TOKEN_KEY = os.getenv("TOKEN_KEY", "accessToken")

REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
