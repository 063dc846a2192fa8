# database.py
from pymongo import MongoClient
from config import MONGODB_URI, MONGODB_DB

client = MongoClient(MONGODB_URI)
db = client[MONGODB_DB]

# Collections
users = db.users


def get_users_collection():
    return users
