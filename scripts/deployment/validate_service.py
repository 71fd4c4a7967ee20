#!/usr/bin/env python3
"""
Validation script for URL Shortener service.
Exercises a live running service to make sure every endpoint behaves.
"""

import argparse
import sys
import time
from datetime import datetime
from typing import Callable, Optional, Tuple

import requests

CheckResult = Tuple[bool, str]


class ServiceValidator:
    """Validates URL shortener service functionality."""

    def __init__(self, base_url: str = "http://localhost:8080", timeout: float = 5):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.test_results = []

    def print_header(self, text: str):
        """Print a formatted header."""
        print(f"\n{'='*60}")
        print(f"  {text}")
        print(f"{'='*60}\n")

    def print_test(self, name: str, passed: bool, details: str = ""):
        """Print test result."""
        status = "✅ PASS" if passed else "❌ FAIL"
        self.test_results.append((name, passed))
        print(f"{status} - {name}")
        if details:
            print(f"       {details}")

    def run_check(self, name: str, check: Callable[[], CheckResult]) -> bool:
        """Run one check, recording request errors as failures."""
        try:
            passed, details = check()
        except requests.RequestException as e:
            passed, details = False, f"Error: {e}"
        self.print_test(name, passed, details)
        return passed

    def _post_shorten(self, payload, headers: Optional[dict] = None) -> requests.Response:
        return self.session.post(
            f"{self.base_url}/api/shorten",
            json=payload,
            headers=headers,
            timeout=self.timeout,
        )

    def _expect_status(self, response: requests.Response, expected: int) -> CheckResult:
        return (
            response.status_code == expected,
            f"Status: {response.status_code} (expected {expected})",
        )

    def check_health(self) -> CheckResult:
        response = self.session.get(f"{self.base_url}/api/health", timeout=self.timeout)
        if response.status_code != 200:
            return False, f"Status: {response.status_code}"
        data = response.json()
        return (
            data.get("status") == "healthy" and data.get("store") == "healthy",
            f"Store: {data.get('store')}, URLs: {data.get('total_urls')}",
        )

    def create_short_url(self, url: str) -> Optional[str]:
        """Create a short URL and check the response shape."""
        short_id = None

        def check() -> CheckResult:
            nonlocal short_id
            response = self._post_shorten({"url": url})
            if response.status_code != 200:
                return False, f"Status: {response.status_code}"
            data = response.json()
            short_id = data.get("short_id")
            ok = bool(short_id) and len(short_id) == 8 and data.get("original_url") == url
            return ok, f"ID: {short_id}, URL: {data.get('short_url')}"

        self.run_check("Create Short URL", check)
        return short_id

    def check_url_info(self, short_id: str, url: str) -> CheckResult:
        response = self.session.get(f"{self.base_url}/api/urls/{short_id}", timeout=self.timeout)
        if response.status_code != 200:
            return False, f"Status: {response.status_code}"
        data = response.json()
        return (
            data.get("original_url") == url and "created_at" in data,
            f"Created at: {data.get('created_at')}",
        )

    def check_redirect(self, short_id: str, url: str) -> CheckResult:
        response = self.session.get(
            f"{self.base_url}/{short_id}",
            allow_redirects=False,
            timeout=self.timeout,
        )
        location = response.headers.get("Location", "")
        return (
            response.status_code == 302 and location == url,
            f"Redirects to: {location[:50]}" if location else "No Location header",
        )

    def check_method_not_allowed(self, short_id: str) -> CheckResult:
        response = self.session.post(f"{self.base_url}/{short_id}", timeout=self.timeout)
        return self._expect_status(response, 405)

    def check_invalid_url(self) -> CheckResult:
        return self._expect_status(self._post_shorten({"url": "not-a-valid-url"}), 400)

    def check_disallowed_scheme(self) -> CheckResult:
        return self._expect_status(self._post_shorten({"url": "ftp://example.com/file"}), 400)

    def check_extra_field(self) -> CheckResult:
        response = self._post_shorten({"url": "https://example.com", "custom_code": "abc"})
        return self._expect_status(response, 400)

    def check_content_type(self) -> CheckResult:
        response = self.session.post(
            f"{self.base_url}/api/shorten",
            data='{"url": "https://example.com"}',
            headers={"Content-Type": "text/plain"},
            timeout=self.timeout,
        )
        return self._expect_status(response, 415)

    def check_nonexistent_id(self) -> CheckResult:
        response = self.session.get(
            f"{self.base_url}/missingid",
            allow_redirects=False,
            timeout=self.timeout,
        )
        return self._expect_status(response, 404)

    def check_stats(self) -> CheckResult:
        response = self.session.get(f"{self.base_url}/api/stats", timeout=self.timeout)
        if response.status_code != 200:
            return False, f"Status: {response.status_code}"
        data = response.json()
        return "total_urls" in data, f"Total URLs: {data.get('total_urls', 'N/A')}"

    def run_all_tests(self) -> bool:
        """Run all validation tests."""
        self.print_header("URL Shortener Service Validation")
        print(f"Testing service at: {self.base_url}")
        print(f"Timestamp: {datetime.now().isoformat()}\n")

        if not self.run_check("Health Check", self.check_health):
            print("\n❌ Health check failed. Service may not be running.")
            print(f"   Make sure the service is accessible at {self.base_url}")
            return False

        print()

        test_url = f"https://example.com/test/{int(time.time())}"
        short_id = self.create_short_url(test_url)
        if short_id:
            self.run_check("Get URL Info", lambda: self.check_url_info(short_id, test_url))
            self.run_check("URL Redirect", lambda: self.check_redirect(short_id, test_url))
            self.run_check("Redirect Method Not Allowed", lambda: self.check_method_not_allowed(short_id))

        print()

        self.run_check("Invalid URL Rejection", self.check_invalid_url)
        self.run_check("Disallowed Scheme Rejection", self.check_disallowed_scheme)
        self.run_check("Extra Field Rejection", self.check_extra_field)
        self.run_check("Content-Type Enforcement", self.check_content_type)
        self.run_check("Non-existent ID", self.check_nonexistent_id)

        print()

        self.run_check("Stats Endpoint", self.check_stats)

        self.print_summary()

        return all(passed for _, passed in self.test_results)

    def print_summary(self):
        """Print test summary."""
        total = len(self.test_results)
        passed = sum(1 for _, p in self.test_results if p)
        failed = total - passed

        self.print_header("Test Summary")
        print(f"Total Tests:  {total}")
        print(f"✅ Passed:     {passed}")
        print(f"❌ Failed:     {failed}")
        print(f"Success Rate: {(passed/total*100):.1f}%")

        if failed > 0:
            print("\n⚠️  Failed tests:")
            for name, passed in self.test_results:
                if not passed:
                    print(f"   - {name}")

        print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Validate URL Shortener service functionality"
    )
    parser.add_argument(
        "--url",
        default="http://localhost:8080",
        help="Base URL of the service (default: http://localhost:8080)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=5,
        help="Per-request timeout in seconds (default: 5)"
    )

    args = parser.parse_args()

    validator = ServiceValidator(args.url, timeout=args.timeout)

    try:
        success = validator.run_all_tests()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\n⚠️  Validation interrupted by user")
        sys.exit(2)
    except Exception as e:
        print(f"\n\n❌ Validation failed with error: {str(e)}")
        sys.exit(3)


if __name__ == "__main__":
    main()
