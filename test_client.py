#!/usr/bin/env python3

import uuid
import requests

BASE_URL = "http://localhost:8000"

def run_smoke_test():
    suffix = uuid.uuid4().hex[:6]
    user_data = {"name": f"Bo-{suffix}", "email": f"bo-{suffix}@x.com", "password": "hunter2"}
    response = requests.post(f"{BASE_URL}/users", json=user_data)
    
    if response.status_code != 201:
        print(f"Registration failed: {response.json()}")
        return
    
    user = response.json()
    print(f"Registered {user['name']}, token: {user['accessToken'][:20]}...")
    
    response = requests.post(f"{BASE_URL}/sessions", json={"email": user_data["email"], "password": "hunter2"})
    session = response.json()
    print(f"Login {response.status_code}, same token: {session['accessToken'] == user['accessToken']}")
    
    response = requests.get(f"{BASE_URL}/secrets", headers={"Authorization": session["accessToken"]})
    print(f"Secret with token: {response.status_code} {response.json()}")
    
    response = requests.get(f"{BASE_URL}/secrets")
    print(f"Secret without token: {response.status_code} {response.json()}")
    
    response = requests.post(f"{BASE_URL}/users/{session['userId']}", json={"message": "Hello from the smoke test"})
    post = response.json()
    print(f"Posted message {post['id']}")
    
    response = requests.post(f"{BASE_URL}/users/{session['userId']}/{post['id']}/like")
    print(f"Liked: {response.status_code}")
    
    response = requests.get(f"{BASE_URL}/users/messages", params={"sort": "likes"})
    for message in response.json():
        print(f"  {message['likes']:>3} {message['message']}")

if __name__ == "__main__":
    run_smoke_test()
