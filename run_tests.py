"""
Test runner script for the tracker service.
"""
import subprocess
import sys
import time
import requests
from pathlib import Path


SERVICE_URL = "http://localhost:80"


def wait_for_service(url: str, timeout: int = 30) -> bool:
    """Wait for a service to become available."""
    print(f"Waiting for service at {url}...")
    
    for i in range(timeout):
        try:
            response = requests.get(f"{url}/health", timeout=2)
            if response.status_code == 200:
                print(f"✓ Service ready at {url}")
                return True
        except requests.exceptions.RequestException:
            pass
        
        if i < timeout - 1:
            time.sleep(1)
    
    print(f"✗ Service at {url} did not become ready in {timeout}s")
    return False


def run_unit_tests():
    """Run unit tests."""
    print("Running unit tests...")
    result = subprocess.run([
        sys.executable, "-m", "pytest",
        "tests/",
        "-v"
    ], cwd=Path(__file__).parent)
    
    return result.returncode == 0


def run_smoke_test(url: str = SERVICE_URL):
    """Check the fallback route and status endpoint of a running service."""
    print("Checking if the tracker service is available...")
    
    if not wait_for_service(url, timeout=5):
        print("⚠ Tracker service is not available. Skipping smoke test.")
        print("To run the smoke test, start the service with:")
        print("  python run_dev.py")
        return True  # Don't fail the overall test run
    
    print("Running smoke test...")
    try:
        # Unknown update types are accepted and leave the state untouched
        response = requests.post(
            f"{url}/smoke_test_update/",
            json={"username": "smoke-test"},
            timeout=5
        )
        response.raise_for_status()
        
        if response.json()["status"] != "ignored":
            print(f"✗ Unexpected fallback response: {response.json()}")
            return False
        
        status = requests.get(f"{url}/status", timeout=5)
        status.raise_for_status()
        data = status.json()
        
        if data.get("username") == "smoke-test":
            print("✗ Unknown update changed the player state")
            return False
        
        print(f"✓ Status served for {data.get('username')}")
        return True
        
    except requests.exceptions.RequestException as e:
        print(f"✗ Smoke test failed: {e}")
        return False


def main():
    """Run all tests."""
    print("Player State Tracker Tests")
    print("=" * 50)
    
    success = True
    
    # Run unit tests
    if not run_unit_tests():
        print("✗ Unit tests failed!")
        success = False
    else:
        print("✓ Unit tests passed!")
    
    print()
    
    # Smoke test against a running service
    if not run_smoke_test():
        print("✗ Smoke test failed!")
        success = False
    else:
        print("✓ Smoke test passed!")
    
    print("\n" + "=" * 50)
    if success:
        print("✓ All tests passed!")
        sys.exit(0)
    else:
        print("✗ Some tests failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
