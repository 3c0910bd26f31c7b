"""Static catalogue of administrative letter templates.

Bodies use ``{{name}}`` placeholders. ``variables`` lists the names a
complete document needs; ``task_categories`` lists the task categories the
template is suggested for.
"""

from famdocs.engine.models import Template, TemplateKind

# Template categories
ECOLE = "ecole"
CRECHE = "creche"
SANTE = "sante_mutuelle"
ATTESTATION = "attestation"
LOGEMENT = "logement"
CONTRAT_FACTURE = "contrat_facture"
DOCUMENTS = "documents"
TRAVAIL = "travail"

TEMPLATES: tuple[Template, ...] = (
    # =========================================================================
    # École
    # =========================================================================
    Template(
        id="ecole_absence",
        label="Justificatif d'absence scolaire",
        category=ECOLE,
        kind=TemplateKind.LETTER,
        variables=(
            "parentName",
            "childName",
            "absenceVerb",
            "absenceDate",
            "absenceMotiveSentence",
            "schoolName",
            "city",
            "date",
        ),
        task_categories=("enfants-école",),
        body="""{{city}}, le {{date}}

{{parentName}}

À l'attention de l'équipe enseignante
{{schoolName}}

Objet : Absence de {{childName}}

Madame, Monsieur,

Je vous informe que mon enfant {{childName}} {{absenceVerb}} le {{absenceDate}}.

{{absenceMotiveSentence}}

Je vous remercie de bien vouloir excuser cette absence et vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{parentName}}""",
    ),
    Template(
        id="ecole_autorisation_sortie",
        label="Autorisation de sortie scolaire",
        category=ECOLE,
        kind=TemplateKind.ATTESTATION,
        variables=("parentName", "childName", "childClass", "sortieDate", "sortieDestination", "schoolName", "city", "date"),
        task_categories=("enfants-école",),
        body="""AUTORISATION DE SORTIE SCOLAIRE

Je soussigné(e) {{parentName}}, responsable légal de {{childName}}, élève en classe de {{childClass}} à {{schoolName}}, autorise mon enfant à participer à la sortie prévue le {{sortieDate}} à destination de {{sortieDestination}}.

Fait à {{city}}, le {{date}}

Signature :
{{parentName}}""",
    ),
    Template(
        id="ecole_inscription",
        label="Demande d'inscription scolaire",
        category=ECOLE,
        kind=TemplateKind.LETTER,
        variables=(
            "parentName",
            "parentAddress",
            "parentPostalCode",
            "parentCity",
            "childName",
            "childBirthDate",
            "requestedClass",
            "schoolName",
            "schoolYear",
            "city",
            "date",
        ),
        task_categories=("enfants-école", "administratif"),
        body="""{{parentName}}
{{parentAddress}}
{{parentPostalCode}} {{parentCity}}

À l'attention de la direction
{{schoolName}}

{{city}}, le {{date}}

Objet : Demande d'inscription pour l'année {{schoolYear}}

Madame, Monsieur,

Je souhaite inscrire mon enfant {{childName}}, né(e) le {{childBirthDate}}, en classe de {{requestedClass}} pour l'année scolaire {{schoolYear}}.

Je tiens à votre disposition les pièces nécessaires au dossier.

Je vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{parentName}}""",
    ),
    Template(
        id="ecole_changement_adresse",
        label="Notification de changement d'adresse",
        category=ECOLE,
        kind=TemplateKind.LETTER,
        variables=("parentName", "newAddress", "newPostalCode", "newCity", "childName", "effectiveDate", "schoolName", "city", "date"),
        task_categories=("enfants-école", "administratif"),
        body="""{{city}}, le {{date}}

À l'attention du secrétariat
{{schoolName}}

Objet : Changement d'adresse

Madame, Monsieur,

Je vous informe qu'à compter du {{effectiveDate}}, notre famille résidera à l'adresse suivante :

{{newAddress}}
{{newPostalCode}} {{newCity}}

Je vous remercie de mettre à jour le dossier de {{childName}}.

Cordialement,

{{parentName}}""",
    ),
    # =========================================================================
    # Crèche
    # =========================================================================
    Template(
        id="creche_absence",
        label="Justificatif d'absence en crèche",
        category=CRECHE,
        kind=TemplateKind.LETTER,
        variables=(
            "parentName",
            "childName",
            "absenceVerb",
            "absenceDate",
            "absenceMotiveSentence",
            "crecheName",
            "city",
            "date",
        ),
        task_categories=("enfants-école",),
        body="""{{city}}, le {{date}}

{{parentName}}

À l'attention de la direction
{{crecheName}}

Objet : Absence de {{childName}}

Madame, Monsieur,

Je vous informe que mon enfant {{childName}} {{absenceVerb}} le {{absenceDate}}.

{{absenceMotiveSentence}}

Je vous remercie de votre compréhension et vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{parentName}}""",
    ),
    Template(
        id="creche_inscription",
        label="Demande d'inscription en crèche",
        category=CRECHE,
        kind=TemplateKind.LETTER,
        variables=(
            "parentName",
            "parentAddress",
            "parentPostalCode",
            "parentCity",
            "parentPhone",
            "childName",
            "childBirthDate",
            "crecheName",
            "startDate",
            "city",
            "date",
        ),
        task_categories=("enfants-école", "administratif"),
        body="""{{parentName}}
{{parentAddress}}
{{parentPostalCode}} {{parentCity}}
Tél. : {{parentPhone}}

À l'attention de la direction
{{crecheName}}

{{city}}, le {{date}}

Objet : Demande de place en crèche

Madame, Monsieur,

Je sollicite une place d'accueil pour mon enfant {{childName}}, né(e) le {{childBirthDate}}, à partir du {{startDate}}.

Je reste disponible pour un entretien et pour compléter le dossier.

Je vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{parentName}}""",
    ),
    # =========================================================================
    # Santé et mutuelle
    # =========================================================================
    Template(
        id="sante_demande_remboursement",
        label="Demande de remboursement mutuelle",
        category=SANTE,
        kind=TemplateKind.LETTER,
        variables=(
            "parentName",
            "parentAddress",
            "parentPostalCode",
            "parentCity",
            "mutuelleRef",
            "prestationType",
            "prestationDate",
            "prestationAmount",
            "mutuelleName",
            "city",
            "date",
        ),
        task_categories=("santé",),
        body="""{{parentName}}
{{parentAddress}}
{{parentPostalCode}} {{parentCity}}
N° d'adhérent : {{mutuelleRef}}

{{mutuelleName}}
Service remboursements

{{city}}, le {{date}}

Objet : Demande de remboursement

Madame, Monsieur,

Je vous adresse ci-joint les justificatifs de la prestation suivante : {{prestationType}}, réalisée le {{prestationDate}}, pour un montant de {{prestationAmount}} €.

Je vous remercie de procéder au remboursement de la part qui vous incombe.

Je vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{parentName}}""",
    ),
    Template(
        id="sante_rdv_medical",
        label="Demande de rendez-vous médical",
        category=SANTE,
        kind=TemplateKind.LETTER,
        variables=("parentName", "parentPhone", "patientName", "consultationType", "preferredDates", "doctorName", "city", "date"),
        task_categories=("santé",),
        body="""{{city}}, le {{date}}

À l'attention de {{doctorName}}

Objet : Demande de rendez-vous

Madame, Monsieur,

Je souhaite prendre rendez-vous pour {{patientName}} pour le motif suivant : {{consultationType}}.

Les disponibilités suivantes nous conviendraient : {{preferredDates}}.

Vous pouvez me joindre au {{parentPhone}}.

Cordialement,

{{parentName}}""",
    ),
    Template(
        id="sante_resiliation_mutuelle",
        label="Résiliation de mutuelle",
        category=SANTE,
        kind=TemplateKind.LETTER,
        variables=(
            "parentName",
            "parentAddress",
            "parentPostalCode",
            "parentCity",
            "mutuelleRef",
            "resiliationDate",
            "mutuelleName",
            "city",
            "date",
        ),
        task_categories=("santé", "administratif"),
        body="""{{parentName}}
{{parentAddress}}
{{parentPostalCode}} {{parentCity}}
N° d'adhérent : {{mutuelleRef}}

{{mutuelleName}}

{{city}}, le {{date}}

Objet : Résiliation de mon contrat

Madame, Monsieur,

Je vous demande de résilier mon contrat de complémentaire santé n° {{mutuelleRef}} à compter du {{resiliationDate}}.

Je vous remercie de m'adresser une confirmation écrite de cette résiliation.

Je vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{parentName}}""",
    ),
    # =========================================================================
    # Attestations
    # =========================================================================
    Template(
        id="attestation_honneur",
        label="Attestation sur l'honneur",
        category=ATTESTATION,
        kind=TemplateKind.ATTESTATION,
        variables=(
            "declarantName",
            "declarantAddress",
            "declarantPostalCode",
            "declarantCity",
            "declarationContent",
            "city",
            "date",
        ),
        task_categories=("administratif",),
        body="""ATTESTATION SUR L'HONNEUR

Je soussigné(e) {{declarantName}}
Demeurant {{declarantAddress}}, {{declarantPostalCode}} {{declarantCity}}

{{declarationContent}}

Fait pour servir et valoir ce que de droit.

Fait à {{city}}, le {{date}}

Signature :
{{declarantName}}""",
    ),
    Template(
        id="attestation_hebergement",
        label="Attestation d'hébergement",
        category=ATTESTATION,
        kind=TemplateKind.ATTESTATION,
        variables=(
            "hostName",
            "hostAddress",
            "hostPostalCode",
            "hostCity",
            "guestName",
            "guestBirthDate",
            "startDate",
            "city",
            "date",
        ),
        task_categories=("administratif", "logement"),
        body="""ATTESTATION D'HÉBERGEMENT

Je soussigné(e) {{hostName}}, demeurant {{hostAddress}}, {{hostPostalCode}} {{hostCity}}, atteste héberger à mon domicile {{guestName}}, né(e) le {{guestBirthDate}}, depuis le {{startDate}}.

Fait à {{city}}, le {{date}}

Signature :
{{hostName}}""",
    ),
    Template(
        id="attestation_domicile",
        label="Attestation de domicile",
        category=ATTESTATION,
        kind=TemplateKind.ATTESTATION,
        variables=("declarantName", "declarantAddress", "declarantPostalCode", "declarantCity", "residenceSince", "city", "date"),
        task_categories=("administratif", "logement"),
        body="""ATTESTATION DE DOMICILE

Je soussigné(e) {{declarantName}} déclare résider au {{declarantAddress}}, {{declarantPostalCode}} {{declarantCity}}, depuis le {{residenceSince}}.

Fait à {{city}}, le {{date}}

Signature :
{{declarantName}}""",
    ),
    # =========================================================================
    # Logement
    # =========================================================================
    Template(
        id="logement_preavis",
        label="Lettre de préavis de départ",
        category=LOGEMENT,
        kind=TemplateKind.LETTER,
        variables=(
            "tenantName",
            "tenantAddress",
            "tenantPostalCode",
            "tenantCity",
            "landlordName",
            "leaveDate",
            "city",
            "date",
        ),
        task_categories=("logement", "administratif"),
        body="""{{tenantName}}
{{tenantAddress}}
{{tenantPostalCode}} {{tenantCity}}

{{landlordName}}

{{city}}, le {{date}}

Objet : Congé du logement

Madame, Monsieur,

Je vous informe de ma décision de quitter le logement que j'occupe au {{tenantAddress}}. Je libérerai les lieux le {{leaveDate}}.

Je vous propose de convenir d'une date pour l'état des lieux de sortie.

Je vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{tenantName}}""",
    ),
    # =========================================================================
    # Contrats et factures
    # =========================================================================
    Template(
        id="contrat_resiliation",
        label="Résiliation de contrat",
        category=CONTRAT_FACTURE,
        kind=TemplateKind.LETTER,
        variables=(
            "customerName",
            "customerAddress",
            "customerPostalCode",
            "customerCity",
            "contractRef",
            "serviceName",
            "resiliationDate",
            "providerName",
            "city",
            "date",
        ),
        task_categories=("logement", "administratif"),
        body="""{{customerName}}
{{customerAddress}}
{{customerPostalCode}} {{customerCity}}

{{providerName}}

{{city}}, le {{date}}

Objet : Résiliation du contrat n° {{contractRef}}

Madame, Monsieur,

Je vous demande de résilier mon contrat {{serviceName}} référencé {{contractRef}}, avec effet au {{resiliationDate}}.

Je vous remercie de me confirmer cette résiliation et de m'adresser la facture de clôture.

Je vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{customerName}}""",
    ),
    Template(
        id="facture_contestation",
        label="Contestation de facture",
        category=CONTRAT_FACTURE,
        kind=TemplateKind.LETTER,
        variables=(
            "customerName",
            "customerAddress",
            "customerPostalCode",
            "customerCity",
            "invoiceRef",
            "invoiceDate",
            "invoiceAmount",
            "contestationReason",
            "providerName",
            "city",
            "date",
        ),
        task_categories=("logement", "finances"),
        body="""{{customerName}}
{{customerAddress}}
{{customerPostalCode}} {{customerCity}}

{{providerName}}
Service clients

{{city}}, le {{date}}

Objet : Contestation de la facture n° {{invoiceRef}}

Madame, Monsieur,

J'ai reçu la facture n° {{invoiceRef}} du {{invoiceDate}}, d'un montant de {{invoiceAmount}} €.

{{contestationReason}}

Je vous remercie de bien vouloir examiner ma demande et de suspendre tout recouvrement dans l'intervalle.

Je vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{customerName}}""",
    ),
    # =========================================================================
    # Documents
    # =========================================================================
    Template(
        id="documents_procuration",
        label="Procuration",
        category=DOCUMENTS,
        kind=TemplateKind.FORM,
        variables=(
            "mandantName",
            "mandantAddress",
            "mandantPostalCode",
            "mandantCity",
            "mandataireName",
            "procurationObject",
            "validityDate",
            "city",
            "date",
        ),
        task_categories=("administratif",),
        body="""PROCURATION

Je soussigné(e) {{mandantName}}, demeurant {{mandantAddress}}, {{mandantPostalCode}} {{mandantCity}}, donne pouvoir à {{mandataireName}} pour : {{procurationObject}}.

Cette procuration est valable jusqu'au {{validityDate}}.

Fait à {{city}}, le {{date}}

Signature du mandant :
{{mandantName}}

Signature du mandataire :
{{mandataireName}}""",
    ),
    Template(
        id="documents_reclamation",
        label="Lettre de réclamation",
        category=DOCUMENTS,
        kind=TemplateKind.LETTER,
        variables=(
            "senderName",
            "senderAddress",
            "senderPostalCode",
            "senderCity",
            "recipientName",
            "reclamationSubject",
            "requestedAction",
            "city",
            "date",
        ),
        task_categories=("administratif",),
        body="""{{senderName}}
{{senderAddress}}
{{senderPostalCode}} {{senderCity}}

{{recipientName}}

{{city}}, le {{date}}

Objet : Réclamation

Madame, Monsieur,

Je vous adresse cette réclamation au sujet de {{reclamationSubject}}.

Je vous demande de bien vouloir {{requestedAction}}.

Dans l'attente de votre réponse, je vous prie d'agréer, Madame, Monsieur, mes salutations distinguées.

{{senderName}}""",
    ),
    # =========================================================================
    # Travail
    # =========================================================================
    Template(
        id="travail_conges",
        label="Demande de congés",
        category=TRAVAIL,
        kind=TemplateKind.LETTER,
        variables=("employeeName", "startDate", "endDate", "employerName", "city", "date"),
        task_categories=("travail", "administratif"),
        body="""{{city}}, le {{date}}

Service des ressources humaines
{{employerName}}

Objet : Demande de congés

Madame, Monsieur,

Je souhaite poser des congés du {{startDate}} au {{endDate}} inclus.

Je vous remercie de bien vouloir me confirmer votre accord.

Cordialement,

{{employeeName}}""",
    ),
)

_BY_ID: dict[str, Template] = {template.id: template for template in TEMPLATES}


def get_template(template_id: str) -> Template | None:
    """Template with the given id, or None."""
    return _BY_ID.get(template_id)


def get_all_templates() -> list[Template]:
    return list(TEMPLATES)


def get_templates_by_category(category: str) -> list[Template]:
    return [t for t in TEMPLATES if t.category == category]


def get_templates_for_task_category(task_category: str) -> list[Template]:
    """Templates suggested for tasks of a given category."""
    return [t for t in TEMPLATES if task_category in t.task_categories]


def get_suggested_template_ids(task_category: str) -> list[str]:
    return [t.id for t in get_templates_for_task_category(task_category)]
