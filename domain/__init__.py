"""Describes the baking domain. Centres around the `MultiStepRecipe`.

Why is this hard?

- A recipe is a sequence of steps and the order has to be exact, 1..N.
- Ingredients can be fixed or ranged and scaling has to treat both the same.
- Instructions are templates. Parameters, groups and ingredients all share
  the `{...}` syntax and are substituted in that order.
- Recipes come from documents, not from code. One bad document should not
  take the rest down with it.

Everything is immutable. Scaling gives you a new recipe.

Catalogs, pantries, prices and unit tables are somebody else's problem.
We only ask them questions.
"""
