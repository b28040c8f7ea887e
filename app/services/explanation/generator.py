from app.services.analysis.statistics import ENGLISH_IOC, RANDOM_IOC, index_of_coincidence
from app.services.pipeline.orchestrator import AttackResult


class ExplanationGenerator:
    """
    Generates human-readable explanations for an attack.

    All explanations are grounded in actual statistics and metrics.
    Every claim references data computed by the pipeline.
    """

    MAX_REPETITIONS = 3
    MAX_DISTANCES = 5

    def generate(self, result: AttackResult) -> list[str]:
        """
        Generate explanations for the attack.

        Args:
            result: Output of VigenereAttack.run

        Returns:
            List of explanation strings
        """
        text = result.normalized.text
        if not text:
            return ["The ciphertext contains no letters; nothing to analyze."]

        explanations = []

        # 1. Explain the ciphertext as a whole
        ioc = index_of_coincidence(text)
        explanations.append(
            f"The ciphertext contains {len(text)} letters. "
            f"Index of Coincidence: {ioc:.4f}. {self._interpret_ioc(ioc)}"
        )

        # 2. Kasiski examination
        explanations.extend(self._explain_kasiski(result))

        # 3. Key length scores
        explanations.extend(self._explain_key_lengths(result))

        # 4. Key recovery
        explanations.extend(self._explain_key(result))

        return explanations

    def _interpret_ioc(self, ioc: float) -> str:
        """Interpret the Index of Coincidence value."""
        if ioc >= 0.060:
            return (
                f"This is close to English ({ENGLISH_IOC:.4f}), "
                "suggesting a single alphabet (key length 1)."
            )
        elif ioc >= 0.045:
            return (
                "This is between English and random, suggesting a "
                "polyalphabetic cipher with a short key."
            )
        else:
            return (
                f"This is close to random ({RANDOM_IOC:.4f}), "
                "suggesting polyalphabetic encryption with a longer key."
            )

    def _explain_kasiski(self, result: AttackResult) -> list[str]:
        """Explain repeated sequences, distances and their divisors."""
        kasiski = result.kasiski
        if not kasiski.distances:
            return [
                "No repeated trigrams or tetragrams were found, so the Kasiski "
                "examination gives no key-length hint."
            ]

        explanations = []

        repetitions = sorted(
            (rep for reps in kasiski.repetitions.values() for rep in reps),
            key=lambda rep: (-len(rep.sequence), -rep.count, rep.positions[0]),
        )[: self.MAX_REPETITIONS]
        seq_info = [
            f"'{rep.sequence}' at {', '.join(map(str, rep.positions))}"
            for rep in repetitions
        ]
        explanations.append(f"Repeated sequences found: {'; '.join(seq_info)}.")

        distances = ", ".join(
            f"{distance} ({count}x)"
            for distance, count in kasiski.distance_frequencies[: self.MAX_DISTANCES]
        )
        explanations.append(
            f"{len(kasiski.distances)} distances between repeats; "
            f"most common: {distances}."
        )

        if kasiski.gcd is not None and kasiski.gcd > 1:
            explanations.append(
                f"The GCD of all distances is {kasiski.gcd}, so the key length is "
                f"likely {kasiski.gcd} or one of its divisors."
            )
        else:
            explanations.append(
                "The distances share no common divisor, so some repeats are "
                "coincidental; divisor counts are more informative."
            )

        if kasiski.factor_frequencies:
            factors = ", ".join(
                f"{factor} ({count})"
                for factor, count in kasiski.factor_frequencies[: self.MAX_DISTANCES]
            )
            explanations.append(f"Most common divisors of the distances: {factors}.")

        return explanations

    def _explain_key_lengths(self, result: AttackResult) -> list[str]:
        """Explain the IC ranking and the chosen key length."""
        explanations = []

        likely = [s.key_length for s in result.key_length_scores if s.likely]
        if likely:
            explanations.append(
                f"Key lengths with an English-like average column IC: "
                f"{', '.join(map(str, likely))}."
            )
        else:
            explanations.append("No key length reached an English-like average column IC.")

        best = next(
            (s for s in result.key_length_scores if s.key_length == result.best_key_length),
            None,
        )
        if best is not None:
            explanations.append(
                f"Best candidate by Index of Coincidence: key length {best.key_length} "
                f"with average IC {best.average_ic:.4f}."
            )

        if result.key_length != result.best_key_length:
            explanations.append(f"Key length {result.key_length} was requested explicitly.")

        return explanations

    def _explain_key(self, result: AttackResult) -> list[str]:
        """Explain the per-column key letters."""
        explanations = [
            f"Column {column.column_index} ({len(column.column)} letters): "
            f"key letter {column.best.letter} (chi-squared {column.best.chi_squared:.1f})."
            for column in result.recovered.columns
        ]

        explanations.append(f"Recovered key: {result.key}.")
        if result.reduced_key != result.key:
            explanations.append(
                f"The key repeats with period {len(result.reduced_key)}; "
                f"reduced key: {result.reduced_key}."
            )

        return explanations
