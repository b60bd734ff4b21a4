"""Text meal estimation prompt template."""

LOG_MEAL_PROMPT = """You are an expert Indian nutritionist. A user has described a meal they ate. Your job is to:

1. Identify the individual food items in the meal, assuming it's Indian cuisine.
2. Estimate the total calorie count for the entire meal.
3. Estimate the protein, carbohydrates, fat, and fiber in grams.

Here is the meal description:

{meal_description}

The foodItems field should be a list of strings."""
