"""
Training Doctrine

One run == one closed, finite pair of tables (training, scoring).

- The cleaning plan and column schema come from the TRAINING table only
  and are applied verbatim to the scoring table.
- Every random choice (split, forest, CV sample, folds) is seeded
  from training.seed. Same inputs + same config -> same run.
- Models live in memory for the duration of the run and are never
  persisted. Cross-validation models are discarded after scoring.
"""
