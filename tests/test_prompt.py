import unittest

from app.services.prompt import CRITERIA, build_prompt


class PromptBuilderTests(unittest.TestCase):
    def test_prompt_embeds_title_and_resume(self):
        prompt = build_prompt("Data Scientist", "Built churn models in Python.")
        self.assertIn('"Data Scientist"', prompt)
        self.assertIn("---\nBuilt churn models in Python.\n---", prompt)

    def test_prompt_is_deterministic(self):
        self.assertEqual(
            build_prompt("DevOps Engineer", "Terraform, Kubernetes"),
            build_prompt("DevOps Engineer", "Terraform, Kubernetes"),
        )

    def test_prompt_lists_all_criteria_in_order(self):
        prompt = build_prompt("Product Manager", "Roadmaps")
        positions = [prompt.index(criterion) for criterion in CRITERIA]
        self.assertEqual(len(CRITERIA), 5)
        self.assertEqual(positions, sorted(positions))

    def test_prompt_requests_grounding_keywords_and_exact_schema(self):
        prompt = build_prompt("Backend Developer", "Go, Postgres")
        self.assertIn("web search", prompt)
        self.assertIn("10-15", prompt)
        self.assertIn("ONLY in a valid JSON format", prompt)
        for field in ("overallScore", "summary", "breakdown", "criterion", "feedback",
                      "keywordAnalysis", "foundKeywords", "missingKeywords"):
            self.assertIn(f'"{field}"', prompt)


if __name__ == "__main__":
    unittest.main()
