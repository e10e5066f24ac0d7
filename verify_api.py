import requests
import json
import sys

BASE_URL = "http://localhost:8000"

def print_response(name, response):
    print(f"--- {name} ---")
    print(f"Status: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    print("\n")

def run_verification(base_url=BASE_URL):
    # 1. Create a user and a product to put in the cart
    print("1. Creating User...")
    resp = requests.post(f"{base_url}/users/", json={"name": "Verify User", "email": "verify_user@example.com"})
    print_response("Create User", resp)
    if resp.status_code != 201:
        print("User creation failed, aborting.")
        return
    user_id = resp.json()["user"]["id"]

    print("2. Creating Product...")
    resp = requests.post(f"{base_url}/products/", json={
        "name": "Verify Hammer",
        "price": 199,
        "image": "/images/hammer.webp",
        "amount_in_stock": 10
    })
    print_response("Create Product", resp)
    if resp.status_code != 201:
        print("Product creation failed, aborting.")
        return
    product_id = resp.json()["product"]["id"]

    # 3. Add twice, the second call accumulates
    print("3. Adding to Cart...")
    print_response("Add 2", requests.post(f"{base_url}/cart/add/{user_id}/{product_id}/2"))
    print_response("Add 3", requests.post(f"{base_url}/cart/add/{user_id}/{product_id}/3"))

    # 4. Overwrite the amount
    print("4. Updating Cart...")
    print_response("Set 1", requests.put(f"{base_url}/cart/update/{user_id}/{product_id}/1"))

    # 5. Rejected amount
    print("5. Invalid Amount...")
    print_response("Add -5", requests.post(f"{base_url}/cart/add/{user_id}/{product_id}/-5"))

    # 6. Cart contents, then removal
    print("6. Listing and Removing...")
    print_response("Cart", requests.get(f"{base_url}/cart/", params={"user_id": user_id}))
    print_response("Delete", requests.delete(f"{base_url}/cart/delete/{user_id}/{product_id}"))
    print_response("Delete again", requests.delete(f"{base_url}/cart/delete/{user_id}/{product_id}"))

if __name__ == "__main__":
    run_verification(sys.argv[1] if len(sys.argv) > 1 else BASE_URL)
